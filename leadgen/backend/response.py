"""JSON envelope shared by the health, pricing and error responses.

Every envelope names the site profile that produced it so a frontend pointed
at the wrong deployment can tell from the payload alone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request


def now_iso() -> str:
	return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _trace(request: Optional[Request]) -> Dict[str, str]:
	if request is None:
		return {}
	trace: Dict[str, str] = {}
	request_id = getattr(request.state, "request_id", None)
	if request_id:
		trace["request_id"] = request_id
	profile = getattr(request.app.state, "site", None)
	if profile is not None:
		trace["site"] = profile.key
	return trace


def success_response(
	*,
	request: Optional[Request] = None,
	data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
	payload: Dict[str, Any] = {"ok": True, "generated_at": now_iso(), **_trace(request)}
	if data is not None:
		payload["data"] = data
	return payload


def error_response(
	*,
	code: str,
	message: str,
	request: Optional[Request] = None,
	evidence: Optional[List[str]] = None,
) -> Dict[str, Any]:
	return {
		"ok": False,
		"generated_at": now_iso(),
		"error": {"code": code, "message": message, "evidence": evidence or []},
		**_trace(request),
	}
