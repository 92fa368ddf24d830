"""Per-site configuration shared by the routers.

Both marketing sites run the same handlers; what differs between them is
captured in a ``SiteProfile`` that ``create_app`` stores on ``app.state``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from fastapi import Request

from leadgen.backend import constants
from leadgen.backend.services import fallback_service, prompt_service


@dataclass(frozen=True)
class AssessmentContext:
	method: str
	user_info: Any
	interaction_mode: Optional[str]
	user_profile: Optional[Mapping[str, Any]]
	model: str


@dataclass(frozen=True)
class SiteProfile:
	key: str
	name: str
	offers_interaction_modes: bool
	system_prompt: Callable[[AssessmentContext], str]
	fallback: Callable[[AssessmentContext], Dict[str, Any]]
	chat_prompt: Optional[Callable[[], str]] = None
	pricing_enabled: bool = False


def _halo_prompt(ctx: AssessmentContext) -> str:
	return prompt_service.method_prompt(ctx.method, ctx.user_info, ctx.interaction_mode)


def _halo_fallback(ctx: AssessmentContext) -> Dict[str, Any]:
	return fallback_service.method_fallback(ctx.method, ctx.user_info, ctx.interaction_mode)


def _visaplace_prompt(ctx: AssessmentContext) -> str:
	return prompt_service.immigration_assessment_prompt(ctx.user_profile, ctx.model)


def _visaplace_fallback(_ctx: AssessmentContext) -> Dict[str, Any]:
	return fallback_service.immigration_fallback()


HALO = SiteProfile(
	key="halo",
	name="HALO Expertise Capture",
	offers_interaction_modes=True,
	system_prompt=_halo_prompt,
	fallback=_halo_fallback,
)

VISAPLACE = SiteProfile(
	key="visaplace",
	name="VisaPlace Immigration",
	offers_interaction_modes=False,
	system_prompt=_visaplace_prompt,
	fallback=_visaplace_fallback,
	chat_prompt=prompt_service.immigration_chat_prompt,
	pricing_enabled=True,
)

SITES: Dict[str, SiteProfile] = {profile.key: profile for profile in (HALO, VISAPLACE)}


def resolve_site(key: str | None = None) -> SiteProfile:
	raw = key if key is not None else os.getenv("LEADGEN_SITE", constants.DEFAULT_SITE)
	candidate = raw.strip().lower() or constants.DEFAULT_SITE
	if candidate not in SITES:
		raise ValueError(f"Unknown site '{candidate}'. Expected one of: {', '.join(sorted(SITES))}.")
	return SITES[candidate]


def site_from_request(request: Request) -> SiteProfile:
	return request.app.state.site
