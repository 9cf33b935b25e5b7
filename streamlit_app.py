"""Streamlit app combining frontend and backend for Campaign Copilot."""
import os

import streamlit as st

# Set API key from Streamlit secrets or environment variables
# Hugging Face Spaces uses environment variables, Streamlit Cloud uses st.secrets
# Backend modules read os.environ, so the env var must be set before they are imported
SECRET_KEYS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "OPENAI_API_KEY")

st.set_page_config(
    page_title="Campaign Copilot",
    page_icon="📧",
    layout="wide"
)


def export_secrets() -> None:
    """Copy known API keys from st.secrets into the environment."""
    try:
        secrets = dict(st.secrets)
    except FileNotFoundError:
        # No secrets.toml (e.g. Hugging Face Spaces): the platform sets env vars
        return
    for name in SECRET_KEYS:
        if name not in os.environ and name in secrets:
            os.environ[name] = str(secrets[name])


export_secrets()

from backend.app.config import get_settings  # noqa: E402
from frontend.app import render_app  # noqa: E402
from frontend.client import LocalClient  # noqa: E402


@st.cache_resource
def get_client() -> LocalClient:
    """Get or create the in-process client (cached to avoid reinitializing on every rerun)."""
    return LocalClient()


if not get_settings().ai_configured:
    st.error("⚠️ No AI provider configured. Set GEMINI_API_KEY in your Streamlit secrets or environment.")
    st.stop()

render_app(get_client())
