"""LLM provider selection with fallback across Gemini, OpenAI and Ollama."""
from dataclasses import dataclass
from typing import Any, List, Optional

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

from backend.app.config import Settings, get_settings
from backend.app.errors import ConfigurationError
from backend.app.logger import logger

QUOTA_MARKERS = ("quota", "429", "resource_exhausted", "rate limit", "insufficient_quota")


@dataclass
class LLMHandle:
    """A ready-to-invoke chat model and where it came from."""
    provider: str
    model: str
    llm: Any


def is_quota_error(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in QUOTA_MARKERS)


def provider_order(settings: Settings) -> List[str]:
    """Preferred provider first, then the remaining ones in default order."""
    order = [settings.llm_provider]
    for name in ("gemini", "openai", "ollama"):
        if name not in order:
            order.append(name)
    return order


def _is_available(name: str, settings: Settings) -> bool:
    if name == "gemini":
        return settings.gemini_configured
    if name == "openai":
        return bool(settings.openai_api_key)
    if name == "ollama":
        return bool(settings.ollama_model)
    return False


def _create(name: str, settings: Settings, json_mode: bool) -> LLMHandle:
    if name == "gemini":
        kwargs = {"response_mime_type": "application/json"} if json_mode else {}
        llm = ChatGoogleGenerativeAI(
            model=settings.gemini_text_model,
            temperature=settings.llm_temperature,
            google_api_key=settings.gemini_api_key,
            **kwargs
        )
        return LLMHandle("gemini", settings.gemini_text_model, llm)

    if name == "openai":
        llm = ChatOpenAI(
            model=settings.openai_model,
            temperature=settings.llm_temperature,
            api_key=settings.openai_api_key
        )
        if json_mode:
            llm = llm.bind(response_format={"type": "json_object"})
        return LLMHandle("openai", settings.openai_model, llm)

    if name == "ollama":
        kwargs = {"format": "json"} if json_mode else {}
        llm = ChatOllama(model=settings.ollama_model, temperature=settings.llm_temperature, **kwargs)
        return LLMHandle("ollama", settings.ollama_model, llm)

    raise ConfigurationError(f"Unknown LLM provider: {name}")


def _first_available(
    settings: Settings,
    json_mode: bool,
    skip: Optional[str] = None
) -> Optional[LLMHandle]:
    for name in provider_order(settings):
        if name == skip or not _is_available(name, settings):
            continue
        try:
            handle = _create(name, settings, json_mode)
            logger.info(f"✓ LLM provider {handle.provider} ({handle.model}) initialized")
            return handle
        except Exception as e:
            logger.warning(f"⚠ {name} LLM failed to initialize: {e}, trying alternatives...")
    return None


def build_llm(settings: Optional[Settings] = None, json_mode: bool = True) -> LLMHandle:
    """Initialize the preferred LLM, falling back to any other configured provider."""
    settings = settings or get_settings()
    handle = _first_available(settings, json_mode)
    if handle is None:
        logger.error("No LLM provider available")
        logger.error("  Options:")
        logger.error("    - Set GEMINI_API_KEY for Google Gemini")
        logger.error("    - Set OPENAI_API_KEY for OpenAI")
        logger.error("    - Set OLLAMA_MODEL to use a local Ollama model")
        raise ConfigurationError()
    return handle


def build_audio_llm(settings: Optional[Settings] = None) -> LLMHandle:
    """Plain-text Gemini model for audio input; only Gemini accepts audio parts here."""
    settings = settings or get_settings()
    if not settings.gemini_configured:
        raise ConfigurationError()
    return _create("gemini", settings, json_mode=False)


def build_fallback_llm(
    failed: LLMHandle,
    settings: Optional[Settings] = None,
    json_mode: bool = True
) -> Optional[LLMHandle]:
    """Initialize the next provider after ``failed`` hit a quota error, if any."""
    settings = settings or get_settings()
    handle = _first_available(settings, json_mode, skip=failed.provider)
    if handle:
        logger.info(f"✓ Switched from {failed.provider} to {handle.provider} LLM")
    return handle
