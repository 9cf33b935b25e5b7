"""Clients used by the Streamlit UI: over HTTP to the backend, or in-process."""
import base64
from typing import Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from backend.agents.marketing_agent import MarketingAgent
from backend.agents.transcriber import VoiceTranscriber
from backend.app.config import BrandingConfig, load_branding, get_settings
from backend.app.errors import CampaignCopilotError
from backend.app.models import (
    CampaignMetricsInput,
    CustomerAnalysisInput,
    CustomerAnalysisResponse,
    EmailContentInput,
    EmailContentResponse,
    EmailSequenceInput,
    EmailSequenceResponse,
    GeneralAiQueryInput,
    GeneralAiResponse,
    PerformanceAnalysisResponse,
    ProductRecommendationInput,
    ProductRecommendationResponse,
    SendTimeOptimizationInput,
    SendTimeOptimizationResponse,
    TranscribeResponse,
)

T = TypeVar("T", bound=BaseModel)

# LLM calls can be slow; voice clips are short
REQUEST_TIMEOUT = 120
HEALTH_TIMEOUT = 2


class ClientError(Exception):
    """A request failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class BackendClient:
    """Talks to the FastAPI backend."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or get_settings().backend_url).rstrip("/")
        self.session = session or requests.Session()

    def is_healthy(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=HEALTH_TIMEOUT)
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    def branding(self) -> BrandingConfig:
        try:
            response = self.session.get(f"{self.base_url}/branding", timeout=HEALTH_TIMEOUT)
            response.raise_for_status()
            return BrandingConfig.model_validate(response.json())
        except (requests.exceptions.RequestException, ValueError):
            return BrandingConfig()

    def _post(self, path: str, payload: BaseModel, response_model: Type[T]) -> T:
        try:
            response = self.session.post(
                f"{self.base_url}{path}",
                json=payload.model_dump(by_alias=True, exclude_none=True),
                timeout=REQUEST_TIMEOUT
            )
        except requests.exceptions.RequestException as e:
            raise ClientError(f"Could not reach the backend: {str(e)}") from e

        if response.status_code >= 400:
            raise self._error_from(response)
        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ClientError(f"Unexpected response from backend: {str(e)}") from e

    @staticmethod
    def _error_from(response: requests.Response) -> ClientError:
        try:
            body = response.json()
        except ValueError:
            return ClientError(f"Backend error {response.status_code}: {response.text[:200]}")

        detail = body.get("detail")
        if isinstance(detail, list):
            # FastAPI request validation errors
            fields = [".".join(str(part) for part in item.get("loc", [])[1:]) for item in detail]
            return ClientError(f"Please fill in all required fields ({', '.join(fields)}).", "validation_error")
        return ClientError(detail or f"Backend error {response.status_code}", body.get("error"))

    def ask_assistant(self, data: GeneralAiQueryInput) -> GeneralAiResponse:
        return self._post("/assistant", data, GeneralAiResponse)

    def analyze_customer_data(self, data: CustomerAnalysisInput) -> CustomerAnalysisResponse:
        return self._post("/customers/analyze", data, CustomerAnalysisResponse)

    def generate_email_content(self, data: EmailContentInput) -> EmailContentResponse:
        return self._post("/emails/generate", data, EmailContentResponse)

    def optimize_send_time(self, data: SendTimeOptimizationInput) -> SendTimeOptimizationResponse:
        return self._post("/send-time/optimize", data, SendTimeOptimizationResponse)

    def analyze_performance(self, data: CampaignMetricsInput) -> PerformanceAnalysisResponse:
        return self._post("/performance/analyze", data, PerformanceAnalysisResponse)

    def recommend_products(self, data: ProductRecommendationInput) -> ProductRecommendationResponse:
        return self._post("/products/recommend", data, ProductRecommendationResponse)

    def generate_email_sequence(self, data: EmailSequenceInput) -> EmailSequenceResponse:
        return self._post("/sequences/generate", data, EmailSequenceResponse)

    def transcribe(self, audio: bytes, mime_type: str, language: Optional[str] = None) -> TranscribeResponse:
        payload = {
            "audio_base64": base64.b64encode(audio).decode("ascii"),
            "mime_type": mime_type,
        }
        if language:
            payload["language"] = language
        try:
            response = self.session.post(f"{self.base_url}/voice/transcribe", json=payload, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise ClientError(f"Could not reach the backend: {str(e)}", "network") from e
        if response.status_code >= 400:
            raise self._error_from(response)
        try:
            return TranscribeResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ClientError(f"Unexpected response from backend: {str(e)}", "network") from e


class LocalClient:
    """Runs the agent in-process, for deployments without a separate backend."""

    def __init__(self, agent=None, transcriber=None):
        self.agent = agent or MarketingAgent()
        self.transcriber = transcriber or VoiceTranscriber()

    def is_healthy(self) -> bool:
        return get_settings().ai_configured

    def branding(self) -> BrandingConfig:
        return load_branding()

    def _call(self, operation, data):
        try:
            return operation(data)
        except CampaignCopilotError as e:
            raise ClientError(e.message, e.code) from e

    def ask_assistant(self, data: GeneralAiQueryInput) -> GeneralAiResponse:
        return self._call(self.agent.get_general_response, data)

    def analyze_customer_data(self, data: CustomerAnalysisInput) -> CustomerAnalysisResponse:
        return self._call(self.agent.analyze_customer_data, data)

    def generate_email_content(self, data: EmailContentInput) -> EmailContentResponse:
        return self._call(self.agent.generate_email_content, data)

    def optimize_send_time(self, data: SendTimeOptimizationInput) -> SendTimeOptimizationResponse:
        return self._call(self.agent.optimize_send_time, data)

    def analyze_performance(self, data: CampaignMetricsInput) -> PerformanceAnalysisResponse:
        return self._call(self.agent.analyze_performance, data)

    def recommend_products(self, data: ProductRecommendationInput) -> ProductRecommendationResponse:
        return self._call(self.agent.recommend_products, data)

    def generate_email_sequence(self, data: EmailSequenceInput) -> EmailSequenceResponse:
        return self._call(self.agent.generate_email_sequence, data)

    def transcribe(self, audio: bytes, mime_type: str, language: Optional[str] = None) -> TranscribeResponse:
        try:
            return self.transcriber.transcribe(audio, mime_type, language)
        except CampaignCopilotError as e:
            raise ClientError(e.message, e.code) from e
