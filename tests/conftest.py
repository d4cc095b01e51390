import json

import pytest
import requests

from backend.app import create_app
from backend.services import gemini_client


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


def envelope(answer):
    """Wrap a model answer the way generateContent returns it."""
    text = answer if isinstance(answer, str) else json.dumps(answer, ensure_ascii=False)
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeGemini:
    def __init__(self):
        self.calls = []
        self._outcome = FakeResponse(envelope([]))

    def reply(self, answer):
        self._outcome = FakeResponse(envelope(answer))

    def respond(self, response):
        self._outcome = response

    def fail(self, exc):
        self._outcome = exc

    def post(self, url, headers=None, json=None, **kwargs):
        self.calls.append({"url": url, "headers": headers, "json": json, "kwargs": kwargs})
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(gemini_client.requests, "post", fake.post)
    return fake


@pytest.fixture
def app():
    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'GEMINI_API_KEY': 'test-key',
        'GEMINI_MODEL': 'gemini-test',
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def monstera():
    return {
        "name": "龟背竹",
        "scientificName": "Monstera deliciosa",
        "description": "原产于中美洲热带雨林的天南星科植物。",
        "difficulty": "Easy",
        "care": {
            "light": "明亮散射光",
            "water": "表土干透再浇",
            "soil": "疏松透气的腐殖土",
            "temperature": "18-28°C",
            "humidity": "60% 以上",
            "fertilizer": "生长季每月一次液肥",
        },
        "tags": ["观叶", "网红植物"],
    }


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
