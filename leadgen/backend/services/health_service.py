from __future__ import annotations

import os
from typing import Dict

from leadgen.backend import constants
from leadgen.backend.response import now_iso
from leadgen.backend.services import provider_service
from leadgen.backend.sites import SiteProfile


def get_status(site: SiteProfile) -> Dict[str, object]:
	return {
		"status": "ok",
		"timestamp": now_iso(),
		"version": constants.APP_VERSION,
		"site": {
			"key": site.key,
			"name": site.name,
			"chat_enabled": site.chat_prompt is not None,
			"pricing_enabled": site.pricing_enabled,
		},
		"env": {
			"has_openai": provider_service.has_api_key(),
			"environment": os.getenv("LEADGEN_ENV", "development").strip() or "development",
			"default_model": provider_service.default_model(),
		},
	}
