from __future__ import annotations

from typing import Any, Dict, List

from leadgen.backend.services.prompt_service import METHOD_TITLES, user_field


_MODE_OPTIONS: List[Dict[str, str]] = [
	{
		"id": "mode_buttons",
		"text": "📱 Guided with buttons",
		"value": "buttons",
		"description": "I'll provide helpful buttons to guide our conversation step-by-step",
	},
	{
		"id": "mode_conversation",
		"text": "💬 Open conversation",
		"value": "conversation",
		"description": "Let's have a natural, free-flowing conversation without buttons",
	},
]

_METHOD_OPTIONS: Dict[str, List[Dict[str, str]]] = {
	"1": [
		{
			"id": "story1",
			"text": "Share a challenging project story",
			"value": "I'd like to share a story about a challenging project I worked on...",
			"description": "Tell me about a complex project you tackled",
		},
		{
			"id": "story2",
			"text": "Describe a successful outcome",
			"value": "Let me tell you about a time when things went really well...",
			"description": "Share a story about a major success",
		},
		{
			"id": "story3",
			"text": "Talk about a difficult decision",
			"value": "I remember having to make a tough decision when...",
			"description": "Describe a challenging choice you had to make",
		},
	],
	"2": [
		{
			"id": "process",
			"text": "Process questions",
			"value": "I'd like to answer questions about my processes",
			"description": "How do you approach your work?",
		},
		{
			"id": "decisions",
			"text": "Decision-making questions",
			"value": "I'd like to answer questions about decision-making",
			"description": "How do you make important choices?",
		},
		{
			"id": "tools",
			"text": "Tools and methods questions",
			"value": "I'd like to answer questions about tools and methods",
			"description": "What tools and techniques do you use?",
		},
	],
	"3": [
		{
			"id": "workflow",
			"text": "Show daily workflow",
			"value": "I'll walk you through my typical daily workflow",
			"description": "Demonstrate your regular work process",
		},
		{
			"id": "problem_solving",
			"text": "Demonstrate problem-solving",
			"value": "Let me show you how I approach problem-solving",
			"description": "Walk through your problem-solving process",
		},
		{
			"id": "decision_process",
			"text": "Show decision-making steps",
			"value": "I'll demonstrate how I make decisions",
			"description": "Step through your decision-making process",
		},
	],
	"4": [
		{
			"id": "thinking",
			"text": "Verbalize my thinking process",
			"value": "I'll think aloud about how I approach problems",
			"description": "Share your internal thought process",
		},
		{
			"id": "strategies",
			"text": "Discuss my strategies",
			"value": "Let me explain the strategies I use",
			"description": "Talk about your key approaches and methods",
		},
		{
			"id": "refinements",
			"text": "Share lessons learned",
			"value": "I'll discuss what I've learned and would change",
			"description": "Reflect on improvements and refinements",
		},
	],
}

_COUNTRY_OPTIONS: List[Dict[str, str]] = [
	{
		"id": "country_canada",
		"text": "I want to immigrate to Canada",
		"value": "canada",
		"description": "Explore Canadian immigration pathways including Express Entry, PNP, and more",
	},
	{
		"id": "country_usa",
		"text": "I want to immigrate to the United States",
		"value": "usa",
		"description": "Learn about US Green Cards, work visas, and family immigration",
	},
	{
		"id": "country_unsure",
		"text": "I'm not sure which country is better for me",
		"value": "unsure",
		"description": "Get guidance on choosing between Canada and US immigration",
	},
]


def _history_sentence(user_info: Any) -> str:
	history = user_field(user_info, "history", "")
	if not history:
		return ""
	return f"I'd love to hear about your experience from {history}."


def _greeting(method: str, user_info: Any, title: str) -> str:
	name = user_field(user_info, "name", "there")
	domain = user_field(user_info, "domain", "your field")
	return (
		f"Hi {name}! I'm Spark, and I'm excited to help capture your expertise in {domain} "
		f"using Method {method}: {title}. {_history_sentence(user_info)}"
	)


def interaction_mode_selection(method: str, user_info: Any = None) -> Dict[str, Any]:
	"""Ask the user to pick between guided buttons and open conversation."""
	title = METHOD_TITLES.get(method, "Expertise Capture")
	message = _greeting(method, user_info, title) + "\n\nBefore we begin, how would you prefer to interact with me?"
	return {
		"message": message,
		"currentStep": "Interaction Mode Selection",
		"progress": 0,
		"options": [dict(option) for option in _MODE_OPTIONS],
		"nextAction": "continue",
	}


def method_options(method: str, interaction_mode: str | None) -> List[Dict[str, str]]:
	if interaction_mode == "conversation":
		return []
	options = _METHOD_OPTIONS.get(method)
	if options is not None:
		return [dict(option) for option in options]
	title = METHOD_TITLES.get(method)
	return [
		{
			"id": "start",
			"text": "I'm ready to begin",
			"value": "start",
			"description": f"Start the {title or 'Expertise Capture'} process",
		}
	]


def method_fallback(method: str, user_info: Any = None, interaction_mode: str | None = None) -> Dict[str, Any]:
	"""Canned payload served when the structured generation call fails.

	``method`` is echoed as given so an unrecognised key still shows up in
	``currentStep``; options fall back to the single "start" entry.
	"""
	if not interaction_mode:
		return interaction_mode_selection(method, user_info)
	title = METHOD_TITLES.get(method, "Expertise Capture")
	message = _greeting(method, user_info, title) + " Let's begin this journey together!"
	return {
		"message": message,
		"currentStep": f"Method {method} - Getting Started",
		"progress": 5,
		"options": method_options(method, interaction_mode),
		"nextAction": "continue",
	}


def immigration_fallback() -> Dict[str, Any]:
	return {
		"message": (
			"Welcome to your immigration assessment! I'm here to help guide you through your Canadian "
			"or US immigration journey. Let's start by understanding your goals."
		),
		"currentStep": "Country Selection",
		"progress": 5,
		"options": [dict(option) for option in _COUNTRY_OPTIONS],
		"nextAction": "continue",
	}
