"""Shared test fixtures.

The OpenAI SDK is exercised for real, with its HTTP layer replaced by an
httpx.MockTransport so no request leaves the process.
"""

import json
from typing import Callable, List

import httpx
import pytest
from openai import OpenAI

from services.session import SessionContext

TEST_API_KEY = "sk-test-0123456789abcdef"


class RecordingTransport:
    """Mock transport that records every request and answers with a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def completion_body(content: str) -> dict:
    """A minimal chat-completions envelope carrying `content`."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


@pytest.fixture
def make_client():
    """Return a factory: handler -> (OpenAI client, RecordingTransport)."""
    def _make(handler):
        transport = RecordingTransport(handler)
        client = OpenAI(
            api_key=TEST_API_KEY,
            base_url="https://api.openai.com/v1",
            max_retries=0,
            http_client=httpx.Client(transport=httpx.MockTransport(transport)),
        )
        return client, transport
    return _make


@pytest.fixture
def ctx() -> SessionContext:
    """A session with an API key and two selected fields."""
    session = SessionContext()
    session.credential = TEST_API_KEY
    session.registry.set_fields(["name", "age"])
    return session
