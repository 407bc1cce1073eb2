"""Shared fixtures for the MyKisah test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import Config
from kisah.types import CompletionResponse
from providers import CompletionError


def completion_payload(*contents: str, model: str = "test/model") -> dict:
    return {
        "id": "gen-123",
        "model": model,
        "created": 1700000000,
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i, content in enumerate(contents)
        ],
    }


class RecordingMessenger:
    """Messaging client stand-in that records outbound sends."""

    def __init__(self, fail: bool = False):
        self.sent: list[tuple[object, str]] = []
        self.fail = fail

    async def send_text(self, chat, text: str) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append((chat, text))


class FakeLLM:
    """Completion client stand-in returning a canned response or error."""

    def __init__(self, response: CompletionResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[list] = []

    async def get_chat_completion(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides) -> Config:
        values = {"openrouter_api_key": "sk-test", "kisah_path": str(tmp_path)}
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture
def recording_transport():
    """MockTransport that records requests and replies from a queue of responses."""

    class _Transport(httpx.MockTransport):
        def __init__(self):
            self.requests: list[httpx.Request] = []
            self.responses: list[httpx.Response] = []
            super().__init__(self._handle)

        def _handle(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if not self.responses:
                raise AssertionError("No canned responses left")
            return self.responses.pop(0)

    return _Transport()


@pytest.fixture
def ok_response():
    return CompletionResponse.from_dict(completion_payload("Hello from the model"))


@pytest.fixture
def empty_response():
    return CompletionResponse.from_dict(completion_payload())


@pytest.fixture
def completion_error():
    return CompletionError("OpenRouter API returned an error: Status: 500, Response: oops", status_code=500, body="oops")


@pytest.fixture
def payload():
    return completion_payload


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def failing_messenger():
    return RecordingMessenger(fail=True)


@pytest.fixture
def fake_llm():
    return FakeLLM
