from __future__ import annotations

import json
from collections.abc import Iterator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from leadgen.backend.schemas import ChatRequest
from leadgen.backend.services import chat_service
from leadgen.backend.sites import site_from_request


router = APIRouter(prefix="/api/chat", tags=["chat"])


def _encode_sse(event: str, data: dict) -> str:
	payload = json.dumps(data, ensure_ascii=False)
	return f"event: {event}\ndata: {payload}\n\n"


@router.post("")
def chat(request: Request, payload: ChatRequest):
	try:
		deltas = chat_service.open_stream(
			site=site_from_request(request),
			messages=payload.messages,
			model=payload.model,
		)
	except chat_service.ChatServiceError as exc:
		raise HTTPException(
			status_code=exc.status_code,
			detail={"code": exc.code, "message": exc.message},
		) from exc

	def generate() -> Iterator[str]:
		parts = []
		try:
			for delta in deltas:
				parts.append(delta)
				yield _encode_sse("delta", {"text": delta})
		except chat_service.ChatServiceError as exc:
			yield _encode_sse("error", {"code": exc.code, "message": exc.message})
			return
		yield _encode_sse("done", {"text": "".join(parts)})

	return StreamingResponse(
		generate(),
		media_type="text/event-stream",
		headers={
			"Cache-Control": "no-cache",
			"Connection": "keep-alive",
			"X-Accel-Buffering": "no",
		},
	)
