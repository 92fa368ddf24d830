from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
	"""Tags every request with an id and every response with the serving site."""

	async def dispatch(self, request: Request, call_next) -> Response:
		request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
		request.state.request_id = request_id
		profile = getattr(request.app.state, "site", None)
		site_key = profile.key if profile is not None else "-"

		started = time.perf_counter()
		response = await call_next(request)
		elapsed = time.perf_counter() - started

		response.headers["X-Request-ID"] = request_id
		response.headers["X-Site"] = site_key
		response.headers["X-Process-Time"] = f"{elapsed:.6f}"
		# Streams are logged when headers go out, not when the body finishes.
		logger.debug(
			"site=%s %s %s -> %s in %.3fs [%s]",
			site_key,
			request.method,
			request.url.path,
			response.status_code,
			elapsed,
			request_id,
		)
		return response
