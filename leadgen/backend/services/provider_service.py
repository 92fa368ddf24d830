from __future__ import annotations

import json
import os
import re
from typing import Any, Dict, Iterable, List

from leadgen.backend import constants


class ProviderError(Exception):
	def __init__(self, *, status_code: int, code: str, message: str):
		super().__init__(message)
		self.status_code = status_code
		self.code = code
		self.message = message


def has_api_key() -> bool:
	return bool(os.getenv("OPENAI_API_KEY", "").strip())


def api_key() -> str:
	key = os.getenv("OPENAI_API_KEY", "").strip()
	if not key:
		raise ProviderError(
			status_code=503,
			code="provider_unconfigured",
			message="OpenAI API key not configured. Set OPENAI_API_KEY.",
		)
	return key


def timeout_seconds() -> float:
	raw = os.getenv("LEADGEN_OPENAI_TIMEOUT_S", "").strip()
	if not raw:
		return constants.DEFAULT_OPENAI_TIMEOUT_S
	try:
		value = float(raw)
	except ValueError as exc:
		raise ProviderError(
			status_code=503,
			code="provider_unconfigured",
			message="LEADGEN_OPENAI_TIMEOUT_S must be numeric.",
		) from exc
	if value <= 0:
		raise ProviderError(
			status_code=503,
			code="provider_unconfigured",
			message="LEADGEN_OPENAI_TIMEOUT_S must be greater than zero.",
		)
	return value


def default_model() -> str:
	return os.getenv("LEADGEN_OPENAI_MODEL", constants.DEFAULT_OPENAI_MODEL).strip() or constants.DEFAULT_OPENAI_MODEL


def resolve_model(requested: str | None) -> str:
	"""Map a frontend model name onto a provider model; unknown names use the default."""
	if requested:
		mapped = constants.MODEL_ALIASES.get(requested.strip())
		if mapped:
			return mapped
	return default_model()


def build_client(*, api_key: str, timeout_s: float):
	try:
		from openai import OpenAI
	except ImportError as exc:
		raise ProviderError(
			status_code=503,
			code="provider_unconfigured",
			message="OpenAI SDK not installed. Add 'openai' dependency.",
		) from exc
	return OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)


def provider_error(exc: Exception) -> ProviderError:
	name = exc.__class__.__name__
	if isinstance(exc, TimeoutError) or name == "APITimeoutError":
		return ProviderError(
			status_code=504,
			code="provider_timeout",
			message="Model provider timed out.",
		)
	return ProviderError(
		status_code=502,
		code="provider_error",
		message="Model provider request failed.",
	)


def input_messages(messages: Iterable[Any]) -> List[Dict[str, str]]:
	"""Convert ChatMessage models or plain dicts into provider input items."""
	items: List[Dict[str, str]] = []
	for message in messages:
		if isinstance(message, dict):
			role = message.get("role")
			content = message.get("content")
		else:
			role = getattr(message, "role", None)
			content = getattr(message, "content", None)
		if isinstance(content, list):
			# Parts-style content keeps only its text parts.
			content = "".join(
				part["text"] for part in content if isinstance(part, dict) and isinstance(part.get("text"), str)
			) or None
		if role not in {"user", "assistant", "system"} or not isinstance(content, str):
			continue
		items.append({"role": role, "content": content})
	return items


def extract_response_text(response: Any) -> str:
	output_text = getattr(response, "output_text", None)
	if isinstance(output_text, str) and output_text.strip():
		return output_text.strip()

	output = getattr(response, "output", None)
	if not isinstance(output, list):
		return ""
	parts: List[str] = []
	for item in output:
		content = getattr(item, "content", None)
		if content is None and isinstance(item, dict):
			content = item.get("content")
		if not isinstance(content, list):
			continue
		for chunk in content:
			text = getattr(chunk, "text", None)
			if text is None and isinstance(chunk, dict):
				text = chunk.get("text")
			if isinstance(text, str) and text.strip():
				parts.append(text.strip())
	return "\n".join(parts).strip()


def extract_json_object(raw: str) -> Dict[str, Any]:
	candidate = raw.strip()
	if candidate.startswith("```"):
		candidate = re.sub(r"^```[a-zA-Z]*\s*", "", candidate)
		candidate = re.sub(r"\s*```$", "", candidate)
	start = candidate.find("{")
	end = candidate.rfind("}")
	if start == -1 or end == -1 or end <= start:
		raise ProviderError(
			status_code=502,
			code="provider_error",
			message="Model provider returned invalid JSON content.",
		)
	try:
		parsed = json.loads(candidate[start : end + 1])
	except json.JSONDecodeError as exc:
		raise ProviderError(
			status_code=502,
			code="provider_error",
			message="Model provider returned invalid JSON content.",
		) from exc
	if not isinstance(parsed, dict):
		raise ProviderError(
			status_code=502,
			code="provider_error",
			message="Model provider returned an unexpected payload shape.",
		)
	return parsed


def extract_stream_delta(event: Any) -> str:
	event_type = getattr(event, "type", None)
	if event_type is None and isinstance(event, dict):
		event_type = event.get("type")
	if isinstance(event_type, str) and event_type != "response.output_text.delta":
		return ""
	value = getattr(event, "delta", None)
	if value is None and isinstance(event, dict):
		value = event.get("delta")
	return value if isinstance(value, str) else ""
