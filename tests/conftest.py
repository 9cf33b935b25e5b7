"""Shared test fixtures for all tests."""
import os
import tempfile

# Keep test logs out of the working tree; must run before backend modules are imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="campaign-copilot-logs-"))

import pytest
import streamlit as st
from langchain_core.messages import AIMessage, AIMessageChunk

from backend.agents.llm_provider import LLMHandle
from backend.app.config import Settings


class FakeChatModel:
    """Stands in for a LangChain chat model: canned replies, records prompts."""

    def __init__(self, replies=None, error=None, chunks=None):
        self.replies = replies if replies is not None else []
        self.error = error
        self.chunks = chunks if chunks is not None else []
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.replies.pop(0))

    def stream(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        for chunk in self.chunks:
            yield AIMessageChunk(content=chunk)


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", openai_api_key="", ollama_model="")


@pytest.fixture
def fake_llm():
    def _make(replies=None, error=None, chunks=None, provider="gemini"):
        model = FakeChatModel(replies=replies, error=error, chunks=chunks)
        return LLMHandle(provider=provider, model=f"{provider}-test", llm=model)
    return _make


@pytest.fixture
def customer_analysis_json():
    return """```json
{
  "profileSummary": "Urban professional who buys organic skincare monthly.",
  "segments": ["High-Value", "Loyal"],
  "personalizationOpportunities": ["Refill reminders"],
  "contentThemes": ["Organic Skincare Tips"],
  "productSuggestions": ["Night cream"],
  "optimalFrequency": "Bi-weekly",
  "optimalTiming": "Tuesday mornings"
}
```"""


@pytest.fixture
def session_state(monkeypatch):
    """Plain dict standing in for Streamlit's per-browser session state."""
    state = {}
    monkeypatch.setattr(st, "session_state", state)
    return state
