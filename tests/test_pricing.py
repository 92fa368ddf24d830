from datetime import date
from unittest import TestCase

from fastapi.testclient import TestClient

from leadgen.backend import sites
from leadgen.backend.main import create_app
from leadgen.backend.services import pricing_service


class PricingServiceTests(TestCase):
	def test_empty_basket_is_free(self) -> None:
		self.assertEqual(pricing_service.total([], []), 0)

	def test_components_sum_individually(self) -> None:
		self.assertEqual(pricing_service.total([], ["sales-analysis", "analytics"]), 1500 + 2000)

	def test_selected_phase_suppresses_member_prices(self) -> None:
		amount = pricing_service.total([1], ["sales-analysis", "law-database", "analytics"])
		self.assertEqual(amount, pricing_service.PHASE_PACKAGES[1].price + 2000)

	def test_duplicates_are_counted_once(self) -> None:
		self.assertEqual(
			pricing_service.total([2, 2], ["crm-integration", "crm-integration"]),
			pricing_service.total([2], ["crm-integration"]),
		)

	def test_unknown_items_raise(self) -> None:
		with self.assertRaises(pricing_service.PricingError) as ctx:
			pricing_service.total([7], ["teleporter"])
		self.assertEqual(ctx.exception.status_code, 400)
		self.assertIn("7", ctx.exception.message)
		self.assertIn("teleporter", ctx.exception.message)

	def test_quote_marks_included_components(self) -> None:
		quote = pricing_service.quote([3], ["analytics", "rag-memory"])
		by_id = {item["id"]: item for item in quote["items"]}
		self.assertTrue(by_id["analytics"]["included"])
		self.assertFalse(by_id["rag-memory"]["included"])
		self.assertEqual(quote["total"], pricing_service.PHASE_PACKAGES[3].price + 3000)
		self.assertEqual(quote["formatted_total"], pricing_service.format_price(quote["total"]))

	def test_breakdown_reports_package_savings(self) -> None:
		summary = pricing_service.breakdown([1], ["custom-logic", "knowledge-portal"])
		self.assertEqual(len(summary["phases"]), 1)
		self.assertEqual(len(summary["phases"][0]["components"]), 4)
		self.assertEqual(summary["individual_components"], [
			{"name": "Client Knowledge Portal", "price": 2500, "phase": 2},
		])
		phase_value = 1500 + 2500 + 2000 + 1000
		self.assertEqual(summary["savings"], phase_value - pricing_service.PHASE_PACKAGES[1].price)
		self.assertEqual(summary["total"], pricing_service.PHASE_PACKAGES[1].price + 2500)

	def test_format_price(self) -> None:
		self.assertEqual(pricing_service.format_price(12345), "$12,345")
		self.assertEqual(pricing_service.format_price(0), "$0")

	def test_proposal_escapes_and_totals(self) -> None:
		summary = {
			"phases": [],
			"individual_components": [{"name": "<script>x</script>", "price": 100, "phase": 1}],
			"total": 100,
			"savings": 0,
		}
		html = pricing_service.render_proposal(summary, date(2026, 3, 2))
		self.assertIn("&lt;script&gt;", html)
		self.assertNotIn("<script>", html)
		self.assertIn("$100", html)
		self.assertIn("Monday, March 02, 2026", html)
		self.assertEqual(
			pricing_service.proposal_filename(date(2026, 3, 2)),
			"VisaPlace-AI-Proposal-2026-03-02.html",
		)


class PricingApiTests(TestCase):
	def setUp(self) -> None:
		self.client = TestClient(create_app(site=sites.VISAPLACE))

	def test_catalog_lists_phases_and_components(self) -> None:
		response = self.client.get("/api/pricing/catalog")
		self.assertEqual(response.status_code, 200)
		data = response.json()["data"]
		self.assertEqual([phase["number"] for phase in data["phases"]], [0, 1, 2, 3])
		self.assertEqual(len(data["components"]), len(pricing_service.COMPONENTS))

	def test_quote_endpoint(self) -> None:
		response = self.client.post("/api/pricing/quote", json={"phases": [0], "components": ["analytics"]})
		self.assertEqual(response.status_code, 200)
		data = response.json()["data"]
		self.assertEqual(data["quote"]["total"], pricing_service.PHASE_PACKAGES[0].price + 2000)
		self.assertEqual(data["breakdown"]["total"], data["quote"]["total"])

	def test_quote_unknown_component_returns_400(self) -> None:
		response = self.client.post("/api/pricing/quote", json={"components": ["teleporter"]})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()["error"]["code"], "pricing_unknown_item")

	def test_proposal_is_html_attachment(self) -> None:
		response = self.client.post("/api/pricing/proposal", json={"phases": [1, 2]})
		self.assertEqual(response.status_code, 200)
		self.assertTrue(response.headers["content-type"].startswith("text/html"))
		self.assertIn("attachment;", response.headers["content-disposition"])
		self.assertIn("VisaPlace-AI-Proposal-", response.headers["content-disposition"])
		self.assertIn("Phase 1: Firm Customization", response.text)

	def test_empty_proposal_rejected(self) -> None:
		response = self.client.post("/api/pricing/proposal", json={})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()["error"]["code"], "pricing_empty_basket")
