from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from leadgen.backend.response import success_response
from leadgen.backend.schemas import ApiEnvelope, PricingSelection
from leadgen.backend.services import pricing_service
from leadgen.backend.sites import site_from_request


router = APIRouter(prefix="/api/pricing", tags=["pricing"])


def _require_pricing(request: Request) -> None:
	site = site_from_request(request)
	if not site.pricing_enabled:
		raise HTTPException(
			status_code=404,
			detail={"code": "pricing_unavailable", "message": f"Pricing is not enabled for site '{site.key}'."},
		)


@router.get("/catalog", response_model=ApiEnvelope)
def get_catalog(request: Request):
	_require_pricing(request)
	return success_response(request=request, data=pricing_service.catalog())


@router.post("/quote", response_model=ApiEnvelope)
def post_quote(request: Request, payload: PricingSelection):
	_require_pricing(request)
	try:
		quote = pricing_service.quote(payload.phases, payload.components)
		summary = pricing_service.breakdown(payload.phases, payload.components)
	except pricing_service.PricingError as exc:
		raise HTTPException(
			status_code=exc.status_code,
			detail={"code": exc.code, "message": exc.message},
		) from exc
	return success_response(
		request=request,
		data={"quote": quote, "breakdown": summary},
	)


@router.post("/proposal", response_class=HTMLResponse)
def post_proposal(request: Request, payload: PricingSelection):
	_require_pricing(request)
	if not payload.phases and not payload.components:
		raise HTTPException(
			status_code=400,
			detail={"code": "pricing_empty_basket", "message": "Select at least one phase or component."},
		)
	try:
		summary = pricing_service.breakdown(payload.phases, payload.components)
	except pricing_service.PricingError as exc:
		raise HTTPException(
			status_code=exc.status_code,
			detail={"code": exc.code, "message": exc.message},
		) from exc
	today = date.today()
	return HTMLResponse(
		content=pricing_service.render_proposal(summary, today),
		headers={
			"Content-Disposition": f'attachment; filename="{pricing_service.proposal_filename(today)}"',
		},
	)
