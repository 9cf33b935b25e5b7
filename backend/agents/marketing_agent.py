"""Marketing agent: prompt -> LLM -> parsed JSON response, one method per capability."""
from typing import Any, Optional, Type, TypeVar

from langchain_core.messages import HumanMessage
from pydantic import BaseModel

from backend.agents import prompt_template
from backend.agents.llm_provider import LLMHandle, build_fallback_llm, build_llm, is_quota_error
from backend.agents.response_parser import parse_model_response
from backend.app.config import Settings, get_settings
from backend.app.errors import AIServiceError, CampaignCopilotError
from backend.app.logger import logger
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
)

T = TypeVar("T", bound=BaseModel)


def message_text(response: Any) -> str:
    """Extract plain text from a chat model response or stream chunk."""
    content = getattr(response, "content", None)
    if content is None:
        content = getattr(response, "text", None)
    if content is None:
        return str(response)
    if isinstance(content, list):
        # Gemini may return content as a list of parts
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


class MarketingAgent:
    """LangChain-backed agent for the email marketing capabilities."""

    def __init__(self, settings: Optional[Settings] = None, llm: Optional[LLMHandle] = None):
        self.settings = settings or get_settings()
        # Created lazily so the service can start without an API key
        self._llm = llm

    @property
    def llm(self) -> LLMHandle:
        if self._llm is None:
            self._llm = build_llm(self.settings)
        return self._llm

    def _invoke(self, prompt: str) -> str:
        handle = self.llm
        try:
            return message_text(handle.llm.invoke([HumanMessage(content=prompt)]))
        except CampaignCopilotError:
            raise
        except Exception as e:
            if not is_quota_error(e):
                logger.error(f"LLM call failed on {handle.provider}: {e}", exc_info=True)
                raise AIServiceError(str(e)) from e

            logger.warning(f"LLM quota exceeded on {handle.provider}: {e}")
            logger.info("  Trying to reinitialize with alternative provider...")
            fallback = build_fallback_llm(handle, self.settings)
            if fallback is None:
                raise AIServiceError(str(e)) from e
            self._llm = fallback
            try:
                return message_text(fallback.llm.invoke([HumanMessage(content=prompt)]))
            except Exception as e2:
                logger.error(f"Alternative LLM also failed: {e2}", exc_info=True)
                raise AIServiceError(str(e2)) from e2

    def _generate(self, prompt: str, response_model: Type[T], action: str) -> T:
        logger.debug(f"Prompt for '{action}': {prompt[:300]}...")
        content = self._invoke(prompt)
        result = parse_model_response(content, response_model, action)
        logger.info(f"✓ {action} completed")
        return result

    def get_general_response(self, data: GeneralAiQueryInput) -> GeneralAiResponse:
        logger.info("AI assistant query received")
        return self._generate(
            prompt_template.build_general_prompt(data),
            GeneralAiResponse,
            "get a response from the AI assistant",
        )

    def analyze_customer_data(self, data: CustomerAnalysisInput) -> CustomerAnalysisResponse:
        logger.info(f"Analyzing customer data ({len(data.customer_data)} chars)")
        return self._generate(
            prompt_template.build_customer_analysis_prompt(data),
            CustomerAnalysisResponse,
            "get analysis",
        )

    def generate_email_content(self, data: EmailContentInput) -> EmailContentResponse:
        logger.info(f"Generating email content for segment: {data.segment}")
        return self._generate(
            prompt_template.build_email_content_prompt(data),
            EmailContentResponse,
            "generate email content",
        )

    def optimize_send_time(self, data: SendTimeOptimizationInput) -> SendTimeOptimizationResponse:
        logger.info(f"Optimizing send time for campaign type: {data.campaign_type}")
        return self._generate(
            prompt_template.build_send_time_prompt(data),
            SendTimeOptimizationResponse,
            "get send time optimization",
        )

    def analyze_performance(self, data: CampaignMetricsInput) -> PerformanceAnalysisResponse:
        logger.info(f"Analyzing campaign performance (open rate {data.open_rate})")
        return self._generate(
            prompt_template.build_performance_prompt(data),
            PerformanceAnalysisResponse,
            "get performance analysis",
        )

    def recommend_products(self, data: ProductRecommendationInput) -> ProductRecommendationResponse:
        logger.info("Generating product recommendations")
        return self._generate(
            prompt_template.build_product_recommendation_prompt(data),
            ProductRecommendationResponse,
            "get product recommendations",
        )

    def generate_email_sequence(self, data: EmailSequenceInput) -> EmailSequenceResponse:
        logger.info(f"Building email sequence: {data.sequence_type}")
        return self._generate(
            prompt_template.build_email_sequence_prompt(data),
            EmailSequenceResponse,
            "generate email sequence",
        )
