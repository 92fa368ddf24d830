from __future__ import annotations

from fastapi import APIRouter, Request

from leadgen.backend.response import success_response
from leadgen.backend.schemas import ApiEnvelope
from leadgen.backend.services import health_service
from leadgen.backend.sites import site_from_request


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=ApiEnvelope)
def get_health(request: Request):
	data = health_service.get_status(site_from_request(request))
	return success_response(
		request=request,
		data=data,
	)
