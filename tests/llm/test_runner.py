"""Tests for the chat-completion runner."""

from __future__ import annotations

import json

import pytest

from plugins_automation.config import LLMConfig
from plugins_automation.llm.runner import LLMRunner


def test_llm_runner_constructs_request() -> None:
    captured = {}

    def fake_runner(request):
        captured["prompt"] = request.prompt
        captured["system"] = request.system
        captured["model"] = request.model
        captured["temperature"] = request.temperature
        captured["max_tokens"] = request.max_tokens
        captured["base_url"] = request.base_url
        captured["api_key"] = request.api_key
        captured["request_timeout"] = request.request_timeout
        return "response"

    runner = LLMRunner(
        model="custom-model",
        base_url="https://llm.example/v1/",
        temperature=0.15,
        max_tokens=256,
        api_key="sk-test",
        request_timeout=42.0,
        runner=fake_runner,
    )
    result = runner.run("Hello world", system="system message")

    assert result == "response"
    assert captured == {
        "prompt": "Hello world",
        "system": "system message",
        "model": "custom-model",
        "temperature": 0.15,
        "max_tokens": 256,
        "base_url": "https://llm.example/v1",
        "api_key": "sk-test",
        "request_timeout": 42.0,
    }


def test_llm_runner_defaults_and_env(monkeypatch: pytest.MonkeyPatch) -> None:
    runner = LLMRunner()
    assert runner.model == "gpt-4o"
    assert runner.base_url == "https://api.openai.com/v1"
    assert runner.temperature == 0.3
    assert runner.enabled is False

    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    runner = LLMRunner()
    assert runner.api_key == "sk-env"
    assert runner.model == "gpt-4o-mini"
    assert runner.enabled is True


def test_llm_runner_from_config_uses_explicit_key() -> None:
    runner = LLMRunner.from_config(LLMConfig(model="m", api_key=None, temperature=0.7))

    assert runner.model == "m"
    assert runner.temperature == 0.7
    assert runner.enabled is False


def test_llm_runner_http_posts_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    class FakeResponse:
        def __init__(self, payload):
            self._payload = payload

        def read(self):
            return json.dumps(self._payload).encode("utf-8")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    def fake_urlopen(request, timeout=None):
        captured["url"] = request.full_url
        captured["headers"] = {k.lower(): v for k, v in request.header_items()}
        captured["payload"] = json.loads(request.data.decode("utf-8"))
        captured["timeout"] = timeout
        return FakeResponse({"choices": [{"message": {"content": "  # Plugin README  "}}]})

    monkeypatch.setattr("plugins_automation.llm.runner.urlopen", fake_urlopen)

    runner = LLMRunner(
        model="gpt-4o",
        base_url="https://api.openai.com/v1/",
        api_key="sk-live",
        temperature=0.3,
        request_timeout=25.0,
    )
    result = runner.run("Write a README.", system="You document plugins.")

    assert result == "# Plugin README"
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    headers = captured["headers"]
    assert headers["content-type"] == "application/json"
    assert headers["authorization"] == "Bearer sk-live"
    payload = captured["payload"]
    assert payload["model"] == "gpt-4o"
    assert payload["messages"] == [
        {"role": "system", "content": "You document plugins."},
        {"role": "user", "content": "Write a README."},
    ]
    assert payload["temperature"] == 0.3
    assert "max_tokens" not in payload
    assert captured["timeout"] == 25.0


def test_llm_runner_http_requires_api_key() -> None:
    runner = LLMRunner(api_key=None)

    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        runner.run("prompt")
