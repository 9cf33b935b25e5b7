"""Exception types raised by the agent and mapped to HTTP responses."""
from typing import Optional


class CampaignCopilotError(Exception):
    """Base class for application errors."""
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(CampaignCopilotError):
    """No usable API key / model provider."""
    status_code = 503
    code = "not_configured"

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Gemini API key is not configured or is a placeholder. Please set a valid API key."
        )


AI_ERROR_PREFIX = "Error communicating with Gemini API: "


class AIServiceError(CampaignCopilotError):
    """The model provider call itself failed."""
    status_code = 502
    code = "ai_service_error"

    def __init__(self, detail: str):
        super().__init__(f"{AI_ERROR_PREFIX}{detail or 'Unknown error'}")
        self.detail = detail


class ResponseParseError(CampaignCopilotError):
    """The completion could not be parsed as JSON."""
    status_code = 502
    code = "unparseable_response"


class MalformedResponseError(ResponseParseError):
    """Parsed JSON is empty or does not fit the expected response shape."""
    code = "malformed_response"

    def __init__(self, action: str, detail: Optional[str] = None):
        super().__init__(f"Failed to {action}. Response might be malformed or empty.")
        self.action = action
        self.detail = detail


SPEECH_ERROR_MESSAGES = {
    "no-speech": "No speech detected. Please try again.",
    "audio-capture": "Audio capture failed. Ensure microphone is enabled and permitted.",
    "not-allowed": "Microphone access denied. Please allow microphone access in browser settings.",
}

# Error codes a recognizer reports; anything else is an application error
SPEECH_ERROR_CODES = ("no-speech", "audio-capture", "not-allowed", "network", "aborted")


def speech_error_message(error_code: str) -> str:
    """User-facing message for a speech recognition error code."""
    return SPEECH_ERROR_MESSAGES.get(error_code, f"Speech recognition error: {error_code}")


class TranscriptionError(CampaignCopilotError):
    """Voice input could not be turned into text."""
    code = "transcription_error"

    def __init__(self, error_code: str):
        super().__init__(speech_error_message(error_code))
        self.error_code = error_code
        self.code = error_code
        self.status_code = 422 if error_code in ("no-speech", "audio-capture") else 502
