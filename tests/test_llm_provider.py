"""Tests for provider selection and fallback."""
from unittest.mock import MagicMock, patch

import pytest

from backend.agents import llm_provider
from backend.agents.llm_provider import (
    LLMHandle,
    build_audio_llm,
    build_fallback_llm,
    build_llm,
    is_quota_error,
    provider_order,
)
from backend.app.config import Settings
from backend.app.errors import ConfigurationError


@pytest.fixture
def chat_classes():
    with patch.object(llm_provider, "ChatGoogleGenerativeAI") as gemini, \
            patch.object(llm_provider, "ChatOpenAI") as openai, \
            patch.object(llm_provider, "ChatOllama") as ollama:
        yield {"gemini": gemini, "openai": openai, "ollama": ollama}


def test_preferred_provider_first():
    assert provider_order(Settings(llm_provider="ollama")) == ["ollama", "gemini", "openai"]
    assert provider_order(Settings()) == ["gemini", "openai", "ollama"]


@pytest.mark.parametrize("message", [
    "429 Too Many Requests",
    "RESOURCE_EXHAUSTED",
    "You exceeded your current quota",
    "insufficient_quota",
])
def test_quota_errors_detected(message):
    assert is_quota_error(RuntimeError(message))


def test_other_errors_not_quota():
    assert not is_quota_error(RuntimeError("invalid API key"))


def test_gemini_requested_with_json_mime_type(chat_classes):
    settings = Settings(gemini_api_key="key", gemini_text_model="gemini-2.5-flash", llm_temperature=0.3)
    handle = build_llm(settings)
    assert handle.provider == "gemini"
    chat_classes["gemini"].assert_called_once_with(
        model="gemini-2.5-flash",
        temperature=0.3,
        google_api_key="key",
        response_mime_type="application/json",
    )


def test_placeholder_gemini_key_skipped(chat_classes):
    settings = Settings(gemini_api_key="YOUR_GEMINI_API_KEY", openai_api_key="sk-test")
    handle = build_llm(settings)
    assert handle.provider == "openai"
    chat_classes["gemini"].assert_not_called()
    chat_classes["openai"].return_value.bind.assert_called_once_with(response_format={"type": "json_object"})


def test_no_provider_raises(chat_classes):
    with pytest.raises(ConfigurationError):
        build_llm(Settings())


def test_init_failure_falls_through(chat_classes):
    chat_classes["gemini"].side_effect = ValueError("bad model")
    handle = build_llm(Settings(gemini_api_key="key", ollama_model="llama3.2"))
    assert handle.provider == "ollama"
    chat_classes["ollama"].assert_called_once_with(model="llama3.2", temperature=0.7, format="json")


def test_fallback_skips_failed_provider(chat_classes):
    settings = Settings(gemini_api_key="key", openai_api_key="sk-test")
    failed = LLMHandle("gemini", "gemini-2.5-flash", MagicMock())
    assert build_fallback_llm(failed, settings).provider == "openai"


def test_fallback_none_when_nothing_else(chat_classes):
    failed = LLMHandle("gemini", "gemini-2.5-flash", MagicMock())
    assert build_fallback_llm(failed, Settings(gemini_api_key="key")) is None


def test_audio_llm_requires_gemini(chat_classes):
    with pytest.raises(ConfigurationError):
        build_audio_llm(Settings(openai_api_key="sk-test"))

    handle = build_audio_llm(Settings(gemini_api_key="key"))
    assert handle.provider == "gemini"
    assert "response_mime_type" not in chat_classes["gemini"].call_args.kwargs
