"""Application settings and branding configuration."""
import json
import os
from copy import deepcopy
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY"
SUPPORTED_PROVIDERS = ("gemini", "openai", "ollama")


# ============================================================================
# SETTINGS
# ============================================================================

class Settings(BaseModel):
    """Runtime settings read from the environment."""
    gemini_api_key: str = Field(default="", description="Gemini API key")
    gemini_text_model: str = Field(default="gemini-2.5-flash", description="Gemini text model")
    llm_temperature: float = Field(default=0.7, description="Sampling temperature")
    llm_provider: str = Field(default="gemini", description="Preferred LLM provider")
    openai_api_key: str = Field(default="", description="OpenAI API key for fallback")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model")
    ollama_model: str = Field(default="", description="Local Ollama model, empty to disable")
    backend_url: str = Field(default="http://localhost:8000", description="Backend base URL")
    log_dir: str = Field(default="logs", description="Log directory")
    log_level: str = Field(default="INFO", description="Console log level")
    speech_language: str = Field(default="en-US", description="Transcription language hint")
    branding_file: str = Field(default="", description="Optional branding JSON override")

    @classmethod
    def from_env(cls) -> "Settings":
        provider = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            provider = "gemini"
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", ""),
            gemini_text_model=os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash"),
            llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.7")),
            llm_provider=provider,
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            ollama_model=os.getenv("OLLAMA_MODEL", ""),
            backend_url=os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            speech_language=os.getenv("SPEECH_LANGUAGE", "en-US"),
            branding_file=os.getenv("BRANDING_FILE", ""),
        )

    @property
    def gemini_configured(self) -> bool:
        key = self.gemini_api_key.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    @property
    def ai_configured(self) -> bool:
        return self.gemini_configured or bool(self.openai_api_key) or bool(self.ollama_model)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings.from_env()


# ============================================================================
# BRANDING
# ============================================================================

class BrandColors(BaseModel):
    primary: str = "#38BDF8"
    secondary: str = "#0F172A"


class SocialMedia(BaseModel):
    blog: str = ""
    linkedin: str = ""
    instagram: str = ""
    github: str = ""
    x: str = ""
    youtube: str = ""

    def links(self) -> Dict[str, str]:
        """Configured links only, in display order."""
        return {platform: url for platform, url in self.model_dump().items() if url}


class Brand(BaseModel):
    short_name: str = Field(default="Campaign Copilot", alias="shortName")
    long_name: str = Field(default="Campaign Copilot AI Email Marketing Suite", alias="longName")
    website: str = ""
    email: str = ""
    mobile: str = ""
    slogan: str = "Smarter email campaigns, powered by AI"
    colors: BrandColors = Field(default_factory=BrandColors)
    social_media: SocialMedia = Field(default_factory=SocialMedia, alias="socialMedia")

    model_config = {"populate_by_name": True}


class BrandingConfig(BaseModel):
    brand: Brand = Field(default_factory=Brand)


def _deep_merge(base: dict, override: dict) -> dict:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_branding(path: Optional[str] = None) -> BrandingConfig:
    """
    Load branding, applying an optional JSON override on top of the defaults.

    The override file may use either camelCase or snake_case keys and only
    needs to contain the keys it changes.
    """
    if path is None:
        path = get_settings().branding_file
    if not path:
        return BrandingConfig()

    branding_path = Path(path)
    if not branding_path.exists():
        return BrandingConfig()

    with branding_path.open("r", encoding="utf-8") as handle:
        override = json.load(handle)

    defaults = BrandingConfig().model_dump(by_alias=True)
    return BrandingConfig.model_validate(_deep_merge(defaults, override))
