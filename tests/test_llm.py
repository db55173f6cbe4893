"""Tests for the generation-service client error mapping."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from apptrack.errors import GenerationError
from apptrack.llm import GenerationClient

_REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def client():
    c = GenerationClient(api_key="test-key", model="test-model", base_url="https://api.groq.com/openai/v1")
    c._client = MagicMock()
    return c


def test_returns_stripped_content(client):
    client._client.chat.completions.create.return_value = _completion("  hello  ")
    assert client.generate("hi") == "hello"


def test_json_mode_requests_json_object(client):
    client._client.chat.completions.create.return_value = _completion("{}")
    client.generate("hi", json_mode=True)
    kwargs = client._client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


def test_plain_mode_has_no_response_format(client):
    client._client.chat.completions.create.return_value = _completion("text")
    client.generate("hi")
    assert "response_format" not in client._client.chat.completions.create.call_args.kwargs


def test_none_content_is_empty_string(client):
    client._client.chat.completions.create.return_value = _completion(None)
    assert client.generate("hi") == ""


def test_status_error_maps_to_generation_error(client):
    err = openai.APIStatusError("denied", response=httpx.Response(401, request=_REQUEST), body=None)
    client._client.chat.completions.create.side_effect = err
    with pytest.raises(GenerationError) as excinfo:
        client.generate("hi")
    assert excinfo.value.status == 401
    assert excinfo.value.__cause__ is err


def test_connection_error_maps_to_generation_error(client):
    client._client.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)
    with pytest.raises(GenerationError) as excinfo:
        client.generate("hi")
    assert excinfo.value.status is None


def test_missing_api_key_fails_before_calling():
    c = GenerationClient(api_key="", model="m", base_url="https://example.invalid")
    c._client = MagicMock()
    with pytest.raises(GenerationError):
        c.generate("hi")
    c._client.chat.completions.create.assert_not_called()


def test_from_env_prefers_override(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "env-key")
    assert GenerationClient.from_env("override-key").api_key == "override-key"
    assert GenerationClient.from_env("").api_key == "env-key"
