import json
import os
from unittest import TestCase
from unittest.mock import patch

from fastapi.testclient import TestClient

from leadgen.backend import sites
from leadgen.backend.main import create_app


def _parse_sse_events(raw: str):
	events = []
	for frame in raw.split("\n\n"):
		frame = frame.strip()
		if not frame:
			continue
		event_name = "message"
		data_lines = []
		for line in frame.splitlines():
			if line.startswith("event:"):
				event_name = line.split(":", 1)[1].strip()
			elif line.startswith("data:"):
				data_lines.append(line.split(":", 1)[1].strip())
		data = json.loads("\n".join(data_lines)) if data_lines else {}
		events.append((event_name, data))
	return events


class _Event:
	def __init__(self, event_type: str, delta: str = ""):
		self.type = event_type
		self.delta = delta


class _FakeResponses:
	def __init__(self, events=None, error: Exception | None = None):
		self._events = events or []
		self._error = error
		self.calls = []

	def create(self, **kwargs):
		self.calls.append(kwargs)
		if self._error is not None:
			raise self._error
		return iter(self._events)


class _FakeClient:
	def __init__(self, events=None, error: Exception | None = None):
		self.responses = _FakeResponses(events=events, error=error)
		self.closed = False

	def __enter__(self):
		return self

	def __exit__(self, *_exc):
		self.closed = True


class ChatStreamTests(TestCase):
	def setUp(self) -> None:
		self.client = TestClient(create_app(site=sites.VISAPLACE))

	def test_stream_emits_deltas_then_done(self) -> None:
		fake = _FakeClient(
			events=[
				_Event("response.created"),
				_Event("response.output_text.delta", "Hello, "),
				_Event("response.output_text.delta", "are you looking at Canada or the US?"),
				_Event("response.completed"),
			]
		)
		with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}, clear=False), patch(
			"leadgen.backend.services.provider_service.build_client", return_value=fake
		):
			with self.client.stream(
				"POST",
				"/api/chat",
				json={"messages": [{"role": "user", "content": "I want to move"}]},
			) as response:
				self.assertEqual(response.status_code, 200)
				raw = "".join(response.iter_text())

		events = _parse_sse_events(raw)
		self.assertEqual([name for name, _ in events], ["delta", "delta", "done"])
		self.assertEqual(events[-1][1]["text"], "Hello, are you looking at Canada or the US?")
		call = fake.responses.calls[0]
		self.assertTrue(call["stream"])
		self.assertIn("immigration assistant for VisaPlace", call["instructions"])
		self.assertEqual(call["input"], [{"role": "user", "content": "I want to move"}])
		self.assertTrue(fake.closed)

	def test_provider_failure_emits_error_event(self) -> None:
		class APITimeoutError(Exception):
			pass

		fake = _FakeClient(error=APITimeoutError("slow"))
		with patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"}, clear=False), patch(
			"leadgen.backend.services.provider_service.build_client", return_value=fake
		):
			with self.client.stream(
				"POST",
				"/api/chat",
				json={"messages": [{"role": "user", "content": "hi"}]},
			) as response:
				raw = "".join(response.iter_text())

		events = _parse_sse_events(raw)
		self.assertEqual(events, [("error", {"code": "provider_timeout", "message": "Model provider timed out."})])
		self.assertTrue(fake.closed)

	def test_missing_key_returns_503(self) -> None:
		with patch.dict(os.environ, {"OPENAI_API_KEY": ""}, clear=False):
			response = self.client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
		self.assertEqual(response.status_code, 503)
		payload = response.json()
		self.assertFalse(payload["ok"])
		self.assertEqual(payload["error"]["code"], "provider_unconfigured")

	def test_empty_messages_rejected(self) -> None:
		response = self.client.post("/api/chat", json={"messages": []})
		self.assertEqual(response.status_code, 422)
