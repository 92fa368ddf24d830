from unittest import TestCase

from leadgen.backend.schemas import UserInfo
from leadgen.backend.services import prompt_service


class PromptTableTests(TestCase):
	def test_each_method_selects_its_own_template(self) -> None:
		expected = {
			"1": "Method 1: Narrative Storytelling Elicitation",
			"2": "Method 2: Targeted Questioning and Probing",
			"3": "Method 3: Observational Simulation and Shadowing",
			"4": "Method 4: Protocol Analysis and Think-Aloud Refinement",
		}
		for method, marker in expected.items():
			with self.subTest(method=method):
				self.assertIn(marker, prompt_service.method_prompt(method))

	def test_unknown_method_uses_method_one_template(self) -> None:
		for method in ("9", "", "five", None):
			with self.subTest(method=method):
				self.assertEqual(
					prompt_service.method_prompt(method, {"name": "Tim"}, "buttons"),
					prompt_service.method_prompt("1", {"name": "Tim"}, "buttons"),
				)

	def test_missing_interaction_mode_defaults_to_buttons(self) -> None:
		prompt = prompt_service.method_prompt("2", None, None)
		self.assertIn("INTERACTION MODE: buttons", prompt)
		self.assertIn("Always provide 2-4 interactive options", prompt)

	def test_conversation_mode_forbids_options(self) -> None:
		for method in ("1", "2", "3", "4"):
			with self.subTest(method=method):
				prompt = prompt_service.method_prompt(method, None, "conversation")
				self.assertIn("INTERACTION MODE: conversation", prompt)
				self.assertIn("return empty options array []", prompt)
				self.assertNotIn("Always provide 2-4 interactive options", prompt)

	def test_user_info_is_interpolated(self) -> None:
		info = UserInfo(name="Ada", domain="structural engineering", history="bridge retrofits")
		prompt = prompt_service.method_prompt("1", info, "buttons")
		self.assertIn("Hi Ada, I'm Spark", prompt)
		self.assertIn("expertise in structural engineering", prompt)
		self.assertIn("especially from bridge retrofits", prompt)

	def test_missing_user_info_uses_placeholders(self) -> None:
		prompt = prompt_service.method_prompt("1")
		self.assertIn("Hi there, I'm Spark", prompt)
		self.assertIn("domain (their field)", prompt)
		self.assertIn("history (their background)", prompt)
		self.assertIn("name (the user)", prompt)

	def test_user_field_accepts_mappings_and_models(self) -> None:
		self.assertEqual(prompt_service.user_field({"name": "  Lin "}, "name"), "Lin")
		self.assertEqual(prompt_service.user_field(UserInfo(domain="law"), "domain"), "law")
		self.assertEqual(prompt_service.user_field({"name": ""}, "name", "there"), "there")

	def test_immigration_prompt_embeds_profile_and_model(self) -> None:
		prompt = prompt_service.immigration_assessment_prompt({"country": "canada"}, "gpt-4o-mini")
		self.assertIn('CURRENT USER PROFILE: {"country": "canada"}', prompt)
		self.assertIn("AI MODEL: gpt-4o-mini", prompt)
		self.assertIn("Country Selection", prompt)

	def test_immigration_prompt_handles_missing_profile(self) -> None:
		prompt = prompt_service.immigration_assessment_prompt(None, "gpt-4o-mini")
		self.assertIn("CURRENT USER PROFILE: {}", prompt)
