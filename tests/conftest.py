import pytest
from fastapi.testclient import TestClient

from chat_relay import upstream
from chat_relay.config import Settings
from chat_relay.main import create_app


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None, content_type="application/json"):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text is not None else ""
        self.content = self.text.encode()
        self.headers = {"Content-Type": content_type} if content_type else {}

    def json(self):
        if self._json is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json


class FakePost:
    """Stands in for requests.post and records every outbound call."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(json_data={"choices": []})
        self.error = None

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings(tmp_path):
    return Settings(
        openai_api_key="sk-test",
        upstream_endpoint="https://upstream.test/v1/chat/completions",
        upstream_timeout=30,
        static_dir=str(tmp_path / "missing"),
    )


@pytest.fixture
def fake_post(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr(upstream.requests, "post", fake)
    return fake


@pytest.fixture
def client(settings, fake_post):
    return TestClient(create_app(settings))
