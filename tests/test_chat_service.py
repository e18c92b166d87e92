"""
Tests for the chat relay: prompt assembly, validation and provider errors
"""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import httpx
import openai
import pytest

import config
from services.chat_service import EMPTY_REPLY, build_prompt, relay_chat
from services.errors import (
    BadRequest,
    ConfigurationError,
    ProcessingError,
    UpstreamError,
)


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(status, text):
    request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
    response = httpx.Response(status, request=request, text=text)
    return openai.APIStatusError("provider failure", response=response, body=None)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    for name in ("CHAT_MODEL", "CHAT_TEMPERATURE", "CHAT_MAX_TOKENS", "CHAT_SYSTEM_PROMPT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def provider():
    with patch("modules.llm_client.client") as mock_client:
        completions = mock_client.return_value.chat.completions
        yield completions


class TestBuildPrompt:
    """Prompt assembly"""

    def test_prepends_exactly_one_system_turn(self):
        turns = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "I feel anxious"},
        ]
        prompt = build_prompt(turns)

        assert len(prompt) == len(turns) + 1
        assert prompt[0] == {"role": "system", "content": config.SYSTEM_PROMPT}
        assert prompt[1:] == turns
        assert [t["role"] for t in prompt].count("system") == 1

    def test_empty_history_still_gets_system_turn(self):
        assert build_prompt([]) == [{"role": "system", "content": config.SYSTEM_PROMPT}]

    def test_system_prompt_can_be_overridden(self, monkeypatch):
        monkeypatch.setenv("CHAT_SYSTEM_PROMPT", "Be brief.")
        assert build_prompt([])[0]["content"] == "Be brief."

    def test_default_prompt_carries_disclaimer_and_language_rule(self):
        assert "NOT a licensed psychologist" in config.SYSTEM_PROMPT
        assert "same language as the user" in config.SYSTEM_PROMPT


class TestRelayChat:
    """Relay behaviour against a mocked provider"""

    @pytest.mark.parametrize("messages", [None, "hello", {"role": "user"}, 42])
    def test_rejects_non_list_input(self, api_key, provider, messages):
        with pytest.raises(BadRequest) as exc:
            relay_chat(messages)
        assert exc.value.to_dict() == {"error": "Invalid messages format"}
        provider.create.assert_not_called()

    def test_rejects_turn_without_content(self, api_key, provider):
        with pytest.raises(BadRequest):
            relay_chat([{"role": "user"}])

    def test_missing_api_key_is_configuration_error(self, monkeypatch, provider):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        with pytest.raises(ConfigurationError) as exc:
            relay_chat([{"role": "user", "content": "I feel anxious"}])
        assert exc.value.status_code == 500
        assert exc.value.to_dict() == {"error": "GROQ_API_KEY is missing"}
        provider.create.assert_not_called()

    def test_sends_fixed_sampling_parameters(self, api_key, provider):
        provider.create.return_value = _completion("You are not alone.")

        answer = relay_chat([{"role": "user", "content": "I feel anxious", "timestamp": 1}])

        assert answer == "You are not alone."
        kwargs = provider.create.call_args.kwargs
        assert kwargs["model"] == "llama3-70b-8192"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 400
        assert kwargs["stream"] is False
        assert kwargs["messages"][1:] == [{"role": "user", "content": "I feel anxious"}]

    def test_empty_completion_becomes_apology(self, api_key, provider):
        provider.create.return_value = _completion(None)
        assert relay_chat([{"role": "user", "content": "hi"}]) == EMPTY_REPLY

    def test_no_choices_becomes_apology(self, api_key, provider):
        provider.create.return_value = SimpleNamespace(choices=[])
        assert relay_chat([{"role": "user", "content": "hi"}]) == EMPTY_REPLY

    def test_provider_status_error_is_upstream_error(self, api_key, provider):
        provider.create.side_effect = _status_error(503, "model overloaded")

        with pytest.raises(UpstreamError) as exc:
            relay_chat([{"role": "user", "content": "hi"}])

        assert exc.value.upstream_status == 503
        assert exc.value.status_code == 500
        assert exc.value.to_dict() == {"error": "Groq API error 503", "details": "model overloaded"}
        assert provider.create.call_count == 1

    def test_unexpected_failure_is_processing_error(self, api_key, provider):
        provider.create.side_effect = RuntimeError("socket closed")

        with pytest.raises(ProcessingError) as exc:
            relay_chat([{"role": "user", "content": "hi"}])

        assert exc.value.to_dict() == {"error": "Failed to process request", "details": "socket closed"}

    def test_processing_error_without_message_says_unknown(self, api_key, provider):
        provider.create.side_effect = RuntimeError()

        with pytest.raises(ProcessingError) as exc:
            relay_chat([{"role": "user", "content": "hi"}])

        assert exc.value.details == "Unknown error"
