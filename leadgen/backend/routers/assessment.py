from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from leadgen.backend.schemas import AssessmentRequest, AssessmentResponse
from leadgen.backend.services import assessment_service
from leadgen.backend.sites import site_from_request


router = APIRouter(prefix="/api/assessment", tags=["assessment"])


@router.post("", response_model=AssessmentResponse, response_model_by_alias=True)
def assess(request: Request, payload: AssessmentRequest):
	result = assessment_service.assess(
		site=site_from_request(request),
		messages=payload.messages,
		user_profile=payload.user_profile,
		model=payload.model,
		method=payload.method,
		user_info=payload.user_info,
		interaction_mode=payload.interaction_mode,
	)
	return JSONResponse(content=result, headers={"Cache-Control": "no-cache"})
