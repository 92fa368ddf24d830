from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from pydantic import ValidationError

from leadgen.backend import constants
from leadgen.backend.schemas import AssessmentResponse
from leadgen.backend.services import fallback_service, provider_service
from leadgen.backend.services.provider_service import ProviderError
from leadgen.backend.sites import AssessmentContext, SiteProfile


logger = logging.getLogger(__name__)

_OPTION_SCHEMA: Dict[str, Any] = {
	"type": "object",
	"properties": {
		"id": {"type": "string", "description": "Unique identifier for the option"},
		"text": {"type": "string", "description": "Button text to display"},
		"value": {"type": "string", "description": "Value to send when clicked"},
		"description": {
			"type": ["string", "null"],
			"description": "Optional description for the option",
		},
	},
	"required": ["id", "text", "value", "description"],
	"additionalProperties": False,
}

# Strict structured outputs require every key; optional fields are nullable instead.
ASSESSMENT_JSON_SCHEMA: Dict[str, Any] = {
	"type": "object",
	"properties": {
		"message": {"type": "string", "description": "The main response message to the user"},
		"currentStep": {"type": "string", "description": "Current step in the assessment process"},
		"progress": {
			"type": "integer",
			"minimum": 0,
			"maximum": 100,
			"description": "Progress percentage (0-100)",
		},
		"options": {
			"type": "array",
			"items": _OPTION_SCHEMA,
			"description": "Interactive options/buttons for the user",
		},
		"nextAction": {
			"type": "string",
			"enum": ["continue", "complete", "redirect"],
			"description": "What should happen next",
		},
		"recommendations": {
			"type": ["array", "null"],
			"items": {"type": "string"},
			"description": "Specific recommendations based on user responses",
		},
		"eligibilityScore": {
			"type": ["integer", "null"],
			"minimum": 0,
			"maximum": 100,
			"description": "Eligibility score if applicable",
		},
	},
	"required": [
		"message",
		"currentStep",
		"progress",
		"options",
		"nextAction",
		"recommendations",
		"eligibilityScore",
	],
	"additionalProperties": False,
}


def is_first_interaction(messages: Sequence[Any]) -> bool:
	return len(messages) <= 1


def validate_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
	try:
		parsed = AssessmentResponse.model_validate(dict(payload))
	except ValidationError as exc:
		raise ProviderError(
			status_code=502,
			code="provider_error",
			message="Model provider returned schema-incompatible content.",
		) from exc
	return parsed.to_wire()


def _generate(*, site: SiteProfile, ctx: AssessmentContext, messages: Sequence[Any]) -> Dict[str, Any]:
	key = provider_service.api_key()
	with provider_service.build_client(api_key=key, timeout_s=provider_service.timeout_seconds()) as client:
		try:
			response = client.responses.create(
				model=ctx.model,
				instructions=site.system_prompt(ctx),
				input=provider_service.input_messages(messages),
				text={
					"format": {
						"type": "json_schema",
						"name": "assessment_response",
						"schema": ASSESSMENT_JSON_SCHEMA,
						"strict": True,
					}
				},
			)
		except Exception as exc:
			raise provider_service.provider_error(exc) from exc

	raw = provider_service.extract_response_text(response)
	if not raw:
		raise ProviderError(
			status_code=502,
			code="provider_error",
			message="Model provider returned an empty response.",
		)
	return validate_payload(provider_service.extract_json_object(raw))


def fallback(site: SiteProfile, ctx: AssessmentContext) -> Dict[str, Any]:
	return AssessmentResponse.model_validate(site.fallback(ctx)).to_wire()


def assess(
	*,
	site: SiteProfile,
	messages: Sequence[Any],
	user_profile: Optional[Mapping[str, Any]] = None,
	model: Optional[str] = None,
	method: str = constants.DEFAULT_METHOD,
	user_info: Any = None,
	interaction_mode: Optional[str] = None,
) -> Dict[str, Any]:
	"""Produce one assessment turn for ``site``.

	The first turn on sites that offer interaction modes asks the user to pick
	one without calling the provider. Every provider-side failure, including a
	missing API key, is logged and answered with the site's canned payload, so
	callers always receive a valid AssessmentResponse.
	"""
	ctx = AssessmentContext(
		method=method or constants.DEFAULT_METHOD,
		user_info=user_info,
		interaction_mode=interaction_mode or None,
		user_profile=user_profile,
		model=provider_service.resolve_model(model),
	)
	logger.info(
		"assessment request site=%s messages=%d method=%s interaction_mode=%s model=%s",
		site.key,
		len(messages),
		ctx.method,
		ctx.interaction_mode,
		ctx.model,
	)

	if site.offers_interaction_modes and is_first_interaction(messages) and not ctx.interaction_mode:
		return fallback_service.interaction_mode_selection(ctx.method, user_info)

	try:
		result = _generate(site=site, ctx=ctx, messages=messages)
	except ProviderError as exc:
		logger.warning("assessment provider failed (%s): %s; serving fallback", exc.code, exc.message)
		return fallback(site, ctx)
	except Exception:
		logger.exception("assessment generation crashed; serving fallback")
		return fallback(site, ctx)

	logger.info(
		"assessment result site=%s step=%r progress=%s next_action=%s options=%d",
		site.key,
		result.get("currentStep"),
		result.get("progress"),
		result.get("nextAction"),
		len(result.get("options", [])),
	)
	return result
