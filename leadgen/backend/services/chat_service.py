from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Sequence

from leadgen.backend.services import provider_service
from leadgen.backend.services.provider_service import ProviderError
from leadgen.backend.sites import SiteProfile


logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
	def __init__(self, *, status_code: int, code: str, message: str):
		super().__init__(message)
		self.status_code = status_code
		self.code = code
		self.message = message

	@classmethod
	def from_provider(cls, exc: ProviderError) -> "ChatServiceError":
		return cls(status_code=exc.status_code, code=exc.code, message=exc.message)


def _iter_deltas(client: Any, *, model: str, instructions: str, messages: Sequence[Any]) -> Iterator[str]:
	with client:
		try:
			stream = client.responses.create(
				model=model,
				instructions=instructions,
				input=provider_service.input_messages(messages),
				stream=True,
			)
			emitted = 0
			for event in stream:
				delta = provider_service.extract_stream_delta(event)
				if delta:
					emitted += len(delta)
					yield delta
		except Exception as exc:
			logger.warning("chat stream failed: %s", exc.__class__.__name__)
			raise ChatServiceError.from_provider(provider_service.provider_error(exc)) from exc
	logger.info("chat stream finished model=%s chars=%d", model, emitted)


def open_stream(
	*,
	site: SiteProfile,
	messages: Sequence[Any],
	model: Optional[str] = None,
) -> Iterator[str]:
	"""Validate configuration and return an iterator of reply text deltas.

	Configuration problems raise ``ChatServiceError`` here, before any bytes
	are streamed; provider failures surface later while iterating.
	"""
	if site.chat_prompt is None:
		raise ChatServiceError(
			status_code=404,
			code="chat_unavailable",
			message=f"Chat is not enabled for site '{site.key}'.",
		)
	try:
		key = provider_service.api_key()
		client = provider_service.build_client(api_key=key, timeout_s=provider_service.timeout_seconds())
	except ProviderError as exc:
		logger.error("chat provider unavailable: %s", exc.message)
		raise ChatServiceError.from_provider(exc) from exc

	resolved_model = provider_service.resolve_model(model)
	logger.info("chat request site=%s messages=%d model=%s", site.key, len(messages), resolved_model)
	return _iter_deltas(
		client,
		model=resolved_model,
		instructions=site.chat_prompt(),
		messages=messages,
	)
