"""Parse the model's (optionally code-fenced) JSON completion into response models."""
import json
import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from backend.app.errors import AI_ERROR_PREFIX, MalformedResponseError, ResponseParseError
from backend.app.logger import logger

T = TypeVar("T", bound=BaseModel)

FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Return the JSON payload with a surrounding ``` / ```json fence removed."""
    json_str = text.strip()
    match = FENCE_RE.match(json_str)
    if match and match.group(1):
        json_str = match.group(1).strip()
    return json_str


def parse_json_response(text: str) -> Any:
    """Decode the completion, distinguishing API error text from bad JSON."""
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        logger.debug(f"Original text: {text}")
        lowered = text.lower()
        if "error" in lowered or "cannot" in lowered:
            raise ResponseParseError(
                f"{AI_ERROR_PREFIX}Gemini API returned an error or unparseable response: {text[:200]}..."
            ) from e
        raise ResponseParseError(
            f"{AI_ERROR_PREFIX}Failed to parse JSON from Gemini response. Ensure the model is configured "
            f"to return valid JSON. Details: {e.msg}"
        ) from e


def parse_model_response(text: str, model: Type[T], action: str) -> T:
    """
    Parse a completion into ``model``.

    Args:
        text: Raw completion text from the model
        model: Pydantic response model for the capability
        action: Human readable action used in the malformed-response message,
            e.g. "analyze customer data"

    Returns:
        The validated response model
    """
    if not text or not text.strip():
        raise MalformedResponseError(action, "empty completion")

    data = parse_json_response(text)
    if not data or not isinstance(data, dict):
        raise MalformedResponseError(action, f"unexpected JSON payload: {type(data).__name__}")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Response did not match {model.__name__}: {e.error_count()} validation error(s)")
        logger.debug(f"Validation details: {e}")
        raise MalformedResponseError(action, str(e)) from e
