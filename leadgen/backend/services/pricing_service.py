"""Pricing basket arithmetic and the downloadable proposal document.

A selected phase package replaces the individual prices of its own
components; components whose phase is not selected are charged one by one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Dict, Iterable, List, Tuple


class PricingError(Exception):
	def __init__(self, *, status_code: int, code: str, message: str):
		super().__init__(message)
		self.status_code = status_code
		self.code = code
		self.message = message


@dataclass(frozen=True)
class Component:
	id: str
	name: str
	price: int
	phase: int


@dataclass(frozen=True)
class PhasePackage:
	number: int
	name: str
	price: int
	components: Tuple[str, ...]


COMPONENTS: Dict[str, Component] = {
	component.id: component
	for component in (
		Component("ai-chatbot", "24/7 AI Immigration Chatbot", 3500, 0),
		Component("smart-assessment", "Smart Eligibility Assessment", 3000, 0),
		Component("sales-analysis", "Sales Conversation Analysis", 1500, 1),
		Component("law-database", "Immigration Law Knowledge Base", 2500, 1),
		Component("custom-logic", "Custom Qualification Logic", 2000, 1),
		Component("integration-testing", "Integration & Quality Testing", 1000, 1),
		Component("rag-memory", "RAG Memory System", 3000, 2),
		Component("knowledge-portal", "Client Knowledge Portal", 2500, 2),
		Component("crm-integration", "CRM Integration", 3500, 3),
		Component("analytics", "Lead Analytics Dashboard", 2000, 3),
	)
}

PHASE_PACKAGES: Dict[int, PhasePackage] = {
	package.number: package
	for package in (
		PhasePackage(0, "Base Package: AI Chatbot & Assessment", 5000, ("ai-chatbot", "smart-assessment")),
		PhasePackage(
			1,
			"Phase 1: Firm Customization",
			5500,
			("sales-analysis", "law-database", "custom-logic", "integration-testing"),
		),
		PhasePackage(2, "Phase 2: Memory & Knowledge Portal", 4500, ("rag-memory", "knowledge-portal")),
		PhasePackage(3, "Phase 3: Enterprise Integration", 4500, ("crm-integration", "analytics")),
	)
}


def format_price(amount: int) -> str:
	return f"${amount:,}"


def _unique(values: Iterable) -> List:
	return list(dict.fromkeys(values))


def _check_selection(phases: Iterable[int], components: Iterable[str]) -> Tuple[List[int], List[str]]:
	phase_list = _unique(phases)
	component_list = _unique(components)
	unknown = [str(number) for number in phase_list if number not in PHASE_PACKAGES]
	unknown += [component_id for component_id in component_list if component_id not in COMPONENTS]
	if unknown:
		raise PricingError(
			status_code=400,
			code="pricing_unknown_item",
			message=f"Unknown pricing items: {', '.join(unknown)}.",
		)
	return phase_list, component_list


def total(phases: Iterable[int], components: Iterable[str]) -> int:
	phase_list, component_list = _check_selection(phases, components)
	amount = sum(PHASE_PACKAGES[number].price for number in phase_list)
	for component_id in component_list:
		component = COMPONENTS[component_id]
		if component.phase not in phase_list:
			amount += component.price
	return amount


def quote(phases: Iterable[int], components: Iterable[str]) -> Dict[str, object]:
	"""Line items plus total for a basket.

	Every selected component is listed, but components covered by a selected
	phase are marked ``included`` and do not count toward the total.
	"""
	phase_list, component_list = _check_selection(phases, components)
	items: List[Dict[str, object]] = []
	for number in phase_list:
		package = PHASE_PACKAGES[number]
		items.append(
			{"type": "phase", "id": number, "name": package.name, "price": package.price, "included": False}
		)
	for component_id in component_list:
		component = COMPONENTS[component_id]
		items.append(
			{
				"type": "component",
				"id": component.id,
				"name": component.name,
				"price": component.price,
				"included": component.phase in phase_list,
			}
		)
	amount = total(phase_list, component_list)
	return {"items": items, "total": amount, "formatted_total": format_price(amount)}


def breakdown(phases: Iterable[int], components: Iterable[str]) -> Dict[str, object]:
	phase_list, component_list = _check_selection(phases, components)
	phase_rows = []
	individual_value = 0
	for number in phase_list:
		package = PHASE_PACKAGES[number]
		members = [COMPONENTS[component_id] for component_id in package.components]
		individual_value += sum(member.price for member in members)
		phase_rows.append(
			{
				"number": number,
				"name": package.name,
				"price": package.price,
				"components": [{"name": member.name, "price": member.price} for member in members],
			}
		)
	loose = []
	for component_id in component_list:
		component = COMPONENTS[component_id]
		if component.phase in phase_list:
			continue
		individual_value += component.price
		loose.append({"name": component.name, "price": component.price, "phase": component.phase})

	amount = total(phase_list, component_list)
	return {
		"phases": phase_rows,
		"individual_components": loose,
		"total": amount,
		"savings": max(0, individual_value - amount),
	}


def catalog() -> Dict[str, object]:
	return {
		"phases": [
			{
				"number": package.number,
				"name": package.name,
				"price": package.price,
				"components": list(package.components),
				"individual_value": sum(COMPONENTS[cid].price for cid in package.components),
			}
			for package in PHASE_PACKAGES.values()
		],
		"components": [
			{"id": c.id, "name": c.name, "price": c.price, "phase": c.phase} for c in COMPONENTS.values()
		],
	}


def proposal_filename(generated_on: date) -> str:
	return f"VisaPlace-AI-Proposal-{generated_on.isoformat()}.html"


def _phase_card(phase: Dict[str, object]) -> str:
	components = phase["components"]
	individual_value = sum(int(c["price"]) for c in components)
	rows = "\n".join(
		f'<div class="component-item"><span class="component-name">{escape(str(c["name"]))}</span>'
		f'<span class="component-price">{format_price(int(c["price"]))}</span></div>'
		for c in components
	)
	return (
		'<div class="phase-card">'
		f'<div class="phase-title">{escape(str(phase["name"]))} '
		f'<span class="phase-price">{format_price(int(phase["price"]))}</span></div>'
		f'<div class="component-list">{rows}</div>'
		f"<small>Individual value: {format_price(individual_value)}</small><br>"
		f"<strong>Package savings: {format_price(max(0, individual_value - int(phase['price'])))}</strong>"
		"</div>"
	)


def _component_card(components: List[Dict[str, object]]) -> str:
	rows = "\n".join(
		f'<div class="component-item"><span class="component-name">{escape(str(c["name"]))} '
		f'<small>Phase {c["phase"]}</small></span>'
		f'<span class="component-price">{format_price(int(c["price"]))}</span></div>'
		for c in components
	)
	return f'<div class="phase-card">{rows}</div>'


_PROPOSAL_STYLE = """
body { font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; margin: 0; padding: 40px; color: #1e293b; line-height: 1.6; }
.header { text-align: center; margin-bottom: 40px; border-bottom: 3px solid #1e3a8a; padding-bottom: 20px; }
.title { font-size: 32px; font-weight: bold; margin: 20px 0; }
.section-title { font-size: 20px; font-weight: bold; color: #1e3a8a; margin-bottom: 15px; }
.phase-card { background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 8px; padding: 20px; margin: 15px 0; }
.phase-price { font-size: 24px; font-weight: bold; color: #1e3a8a; float: right; }
.component-item { display: flex; justify-content: space-between; padding: 8px 0; border-bottom: 1px solid #e2e8f0; }
.total-section { background: #1e3a8a; color: white; padding: 25px; border-radius: 8px; text-align: center; margin: 30px 0; }
.total-amount { font-size: 36px; font-weight: bold; margin: 10px 0; }
""".strip()


def render_proposal(summary: Dict[str, object], generated_on: date) -> str:
	"""Render a ``breakdown`` result as a standalone HTML proposal."""
	sections: List[str] = []
	phases = summary.get("phases") or []
	if phases:
		cards = "\n".join(_phase_card(phase) for phase in phases)
		sections.append(f'<div class="section"><div class="section-title">Complete Phase Packages</div>{cards}</div>')
	loose = summary.get("individual_components") or []
	if loose:
		sections.append(
			f'<div class="section"><div class="section-title">Individual Components</div>{_component_card(loose)}</div>'
		)
	savings = int(summary.get("savings") or 0)
	savings_line = f"<div>You save {format_price(savings)} with package pricing</div>" if savings else ""
	body = "\n".join(sections)
	return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>AI Transformation Proposal - VisaPlace</title>
<style>
{_PROPOSAL_STYLE}
</style>
</head>
<body>
<div class="header">
<div class="title">AI Transformation Proposal</div>
<div>Generated on {generated_on.strftime("%A, %B %d, %Y")}</div>
</div>
{body}
<div class="total-section">
<div>Total Investment</div>
<div class="total-amount">{format_price(int(summary.get("total") or 0))}</div>
{savings_line}
<div>One-time setup, 2-4 weeks implementation</div>
</div>
<div class="footer">This proposal is valid for 30 days from the date of generation.</div>
</body>
</html>
"""
