"""Data models for the marketing capabilities' inputs and JSON responses."""
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


RequiredText = Annotated[str, AfterValidator(_not_blank)]


class CamelModel(BaseModel):
    """Accepts both camelCase (model wire format) and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# AI ASSISTANT
# ============================================================================

class GeneralAiQueryInput(CamelModel):
    """Free-form question for the marketing assistant."""
    user_query: RequiredText = Field(description="User question or statement")


class GeneralAiResponse(CamelModel):
    response_text: str = Field(description="Assistant reply")


# ============================================================================
# CUSTOMER DATA ANALYSIS
# ============================================================================

class CustomerAnalysisInput(CamelModel):
    """Raw customer data: unstructured text, a JSON string or a CSV string."""
    customer_data: RequiredText = Field(description="Raw customer data")


class CustomerAnalysisResponse(CamelModel):
    profile_summary: str = Field(description="Detailed summary of the customer profile")
    segments: List[str] = Field(default_factory=list, description="Customer segments")
    personalization_opportunities: List[str] = Field(default_factory=list)
    content_themes: List[str] = Field(default_factory=list)
    product_suggestions: List[str] = Field(default_factory=list)
    optimal_frequency: str = Field(default="", description="e.g. Weekly, Bi-weekly")
    optimal_timing: str = Field(default="", description="e.g. Tuesday mornings")


# ============================================================================
# EMAIL CONTENT GENERATION
# ============================================================================

class EmailContentInput(CamelModel):
    segment: RequiredText
    campaign_goal: RequiredText
    product_focus: RequiredText
    special_offers: RequiredText
    brand_voice: RequiredText
    customer_insights: RequiredText = Field(description="Insights, typically from customer analysis")


class SubjectLineVariation(CamelModel):
    text: str
    emoji: bool = Field(default=False, description="Whether an emoji suggestion is part of the line")


class CtaVariation(CamelModel):
    text: str
    link: str = Field(default="#", description="Placeholder or example link")


class EmailCtas(CamelModel):
    primary: CtaVariation
    secondary: Optional[CtaVariation] = None
    urgency_driven: List[CtaVariation] = Field(default_factory=list)


class EmailContentResponse(CamelModel):
    subject_lines: List[SubjectLineVariation] = Field(default_factory=list)
    preview_text: str = ""
    email_body_html: str = Field(description="HTML email body")
    ctas: EmailCtas
    personalization_notes: List[str] = Field(default_factory=list)


# ============================================================================
# SEND TIME OPTIMIZATION
# ============================================================================

class SendTimeOptimizationInput(CamelModel):
    historical_open_times: RequiredText = Field(description="Timestamps or descriptive summary")
    time_zone: RequiredText
    device_usage: RequiredText = Field(description="Mobile/desktop preferences")
    engagement_patterns: RequiredText = Field(description="Weekday vs weekend activity")
    campaign_type: RequiredText = Field(description="Newsletter, promotional, transactional")
    industry: Optional[str] = Field(default=None, description="Optional B2B industry")


class SendTimeOptimizationResponse(CamelModel):
    optimal_send_day_time: str
    reasoning: str = ""
    alternative_options: List[str] = Field(default_factory=list)
    time_zone_considerations: str = ""
    frequency_recommendations: str = ""
    seasonal_adjustments: Optional[str] = None
    preference_based_variations: Optional[str] = None
    testing_strategy: str = ""
    performance_tracking_metrics: List[str] = Field(default_factory=list)


# ============================================================================
# PERFORMANCE ANALYSIS
# ============================================================================

class AbTestResults(CamelModel):
    subject_line: Optional[str] = None
    send_time: Optional[str] = None
    cta: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((value or "").strip() for value in (self.subject_line, self.send_time, self.cta))


class CampaignMetricsInput(CamelModel):
    open_rate: RequiredText = Field(description="e.g. 25%")
    click_through_rate: RequiredText
    conversion_rate: RequiredText
    unsubscribe_rate: RequiredText
    revenue_generated: RequiredText = Field(description="e.g. $1500")
    delivery_rate: RequiredText
    segment_performance: Optional[str] = None
    ab_test_results: Optional[AbTestResults] = None


class OptimizationRecommendations(CamelModel):
    subject_line: List[str] = Field(default_factory=list)
    content: List[str] = Field(default_factory=list)
    timing: List[str] = Field(default_factory=list)
    segmentation: List[str] = Field(default_factory=list)


class NextCampaignStrategy(CamelModel):
    winning_elements: List[str] = Field(default_factory=list)
    new_testing_opportunities: List[str] = Field(default_factory=list)
    audience_expansion: List[str] = Field(default_factory=list)


class FollowUpSequences(CamelModel):
    converters: Optional[str] = None
    non_openers: Optional[str] = None
    engaged_non_converters: Optional[str] = None


class PerformanceAnalysisResponse(CamelModel):
    performance_summary: str
    key_wins: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    benchmark_comparisons: Optional[str] = None
    roi_analysis: Optional[str] = None
    optimization_recommendations: OptimizationRecommendations = Field(default_factory=OptimizationRecommendations)
    next_campaign_strategy: NextCampaignStrategy = Field(default_factory=NextCampaignStrategy)
    automated_follow_up_sequences: Optional[FollowUpSequences] = None


# ============================================================================
# PRODUCT RECOMMENDATION
# ============================================================================

class ProductRecommendationInput(CamelModel):
    customer_profile: RequiredText
    available_products: RequiredText = Field(description="Catalog description")
    current_inventory: Optional[str] = Field(default=None, description="Stock information")
    business_goals: RequiredText


class ProductRecommendation(CamelModel):
    name: str
    reasoning: str = ""
    category: Optional[str] = None
    price: Optional[str] = Field(default=None, description="e.g. $29.99")


class ProductRecommendationResponse(CamelModel):
    primary_recommendations: List[ProductRecommendation] = Field(min_length=1)
    cross_sell_opportunities: List[ProductRecommendation] = Field(default_factory=list)
    seasonal_trending_items: List[ProductRecommendation] = Field(default_factory=list)


# ============================================================================
# EMAIL SEQUENCE
# ============================================================================

SequenceType = Literal["Welcome Series", "Abandoned Cart", "Post-Purchase", "Re-engagement"]
SEQUENCE_TYPES: List[str] = ["Welcome Series", "Abandoned Cart", "Post-Purchase", "Re-engagement"]


class EmailSequenceInput(CamelModel):
    sequence_type: SequenceType = "Welcome Series"
    customer_trigger: RequiredText
    business_goal: RequiredText
    sequence_length: RequiredText = Field(description="e.g. 3 emails over 5 days")


class EmailInSequence(CamelModel):
    timing: str
    subject_line: str
    content_focus: str = ""
    cta: str = ""
    personalization: List[str] = Field(default_factory=list)
    exit_conditions: Optional[str] = None


class EmailSequenceResponse(CamelModel):
    sequence_name: str
    emails: List[EmailInSequence] = Field(min_length=1)


# ============================================================================
# VOICE INPUT
# ============================================================================

class TranscribeRequest(BaseModel):
    """Recorded audio clip for transcription."""
    audio_base64: str = Field(description="Base64 encoded audio")
    mime_type: str = Field(default="audio/wav", description="Audio MIME type")
    language: Optional[str] = Field(default=None, description="Language hint, e.g. en-US")


class TranscriptSegment(BaseModel):
    transcript: str
    is_final: bool = False


class TranscribeResponse(BaseModel):
    transcript: str = Field(description="Final transcript")
    segments: List[TranscriptSegment] = Field(default_factory=list, description="Interim and final segments")
