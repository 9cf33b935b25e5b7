"""Tests for settings and branding configuration."""
import json

import pytest

from backend.app.config import BrandingConfig, Settings, load_branding


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "LLM_PROVIDER", "GEMINI_TEXT_MODEL", "BACKEND_URL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_from_empty_env(clean_env):
    settings = Settings.from_env()
    assert settings.gemini_text_model == "gemini-2.5-flash"
    assert settings.llm_provider == "gemini"
    assert not settings.gemini_configured


def test_google_key_used_when_gemini_key_missing(clean_env):
    clean_env.setenv("GOOGLE_API_KEY", "google-key")
    assert Settings.from_env().gemini_api_key == "google-key"


def test_gemini_key_wins(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "gemini-key")
    clean_env.setenv("GOOGLE_API_KEY", "google-key")
    assert Settings.from_env().gemini_api_key == "gemini-key"


def test_unknown_provider_falls_back_to_gemini(clean_env):
    clean_env.setenv("LLM_PROVIDER", "Anthropic")
    assert Settings.from_env().llm_provider == "gemini"


def test_backend_url_trailing_slash_removed(clean_env):
    clean_env.setenv("BACKEND_URL", "http://api:9000/")
    assert Settings.from_env().backend_url == "http://api:9000"


@pytest.mark.parametrize("key,configured", [
    ("", False),
    ("   ", False),
    ("YOUR_GEMINI_API_KEY", False),
    ("AIza-real", True),
])
def test_gemini_configured(key, configured):
    assert Settings(gemini_api_key=key).gemini_configured is configured


def test_ai_configured_with_any_provider():
    assert Settings(ollama_model="llama3.2").ai_configured
    assert not Settings().ai_configured


def test_branding_defaults_without_file():
    assert load_branding("").brand.short_name == "Campaign Copilot"
    assert load_branding("/does/not/exist.json") == BrandingConfig()


def test_branding_file_partial_override(tmp_path):
    path = tmp_path / "branding.json"
    path.write_text(json.dumps({"brand": {
        "shortName": "Acme Mail",
        "colors": {"primary": "#FF0000"},
        "socialMedia": {"github": "https://github.com/acme"},
    }}), encoding="utf-8")

    brand = load_branding(str(path)).brand

    assert brand.short_name == "Acme Mail"
    assert brand.colors.primary == "#FF0000"
    assert brand.colors.secondary == BrandingConfig().brand.colors.secondary
    assert brand.social_media.links() == {"github": "https://github.com/acme"}
