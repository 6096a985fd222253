import json

import httpx
import pytest

from gemini_insights import Product, Sale, load_settings
from gemini_insights.errors import TransportError

ANALYTICS_MARKER = "business analytics expert"
INVENTORY_MARKER = "inventory management expert"
PREDICTION_MARKER = "prediction for next month"
RECOMMENDATION_MARKER = "business consultant"


def envelope(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class ScriptedGenerator:
    """Answer prompts by category marker; exceptions in `replies` are raised."""

    def __init__(self, replies):
        self.replies = replies
        self.prompts = []

    async def __call__(self, prompt):
        self.prompts.append(prompt)
        for marker, reply in self.replies.items():
            if marker in prompt:
                if isinstance(reply, BaseException):
                    raise reply
                return reply
        raise TransportError("no scripted reply", status_code=500)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was handed."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def json_bodies(self):
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def settings():
    return load_settings({"GEMINI_API_KEY": "test-key"})


@pytest.fixture
def settings_without_key():
    return load_settings({})


@pytest.fixture
def products():
    return [
        Product(name="Alpha", stock=5),
        Product(name="Bravo", stock=50),
        Product(name="Charlie", stock=3),
        Product(name="Delta", stock=100),
    ]


@pytest.fixture
def sales():
    return [Sale(id=f"S{i}") for i in range(12)]
