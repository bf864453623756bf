"""Shared pytest fixtures for studio-relay tests."""

from typing import Any, Dict, List, Optional

import pytest

from studio_relay import create_app
from studio_relay.config import BUNDLED_ENDPOINTS, Settings, load_relay_config
from studio_relay.gateway import GatewayError


class FakeGeminiClient:
    """Stands in for GeminiClient; records every generate_content call."""

    api_base = "https://gemini.test/v1beta"

    def __init__(self, text: str = "ok", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, model, contents, system_instruction):
        self.calls.append(
            {"model": model, "contents": contents, "system_instruction": system_instruction}
        )
        if self.error is not None:
            raise self.error
        return {
            "candidates": [
                {"content": {"role": "model", "parts": [{"text": self.text}]}, "finishReason": "STOP"}
            ]
        }

    @property
    def last(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", api_base="https://gemini.test/v1beta", max_body_mb=1)


@pytest.fixture
def relay_config():
    return load_relay_config(BUNDLED_ENDPOINTS)


@pytest.fixture
def fake_client() -> FakeGeminiClient:
    return FakeGeminiClient(text="generated text")


@pytest.fixture
def app(settings, fake_client, relay_config):
    app = create_app(settings=settings, client=fake_client, relay_config=relay_config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def test_client(app):
    return app.test_client()


@pytest.fixture
def failing_client(settings, relay_config):
    client = FakeGeminiClient(error=GatewayError("Quota exceeded for model", status_code=429))
    app = create_app(settings=settings, client=client, relay_config=relay_config)
    return app.test_client()
