"""Tests for request/response model validation."""
import pytest
from pydantic import ValidationError

from backend.app.models import (
    CustomerAnalysisInput,
    EmailContentResponse,
    EmailSequenceInput,
    GeneralAiQueryInput,
    PerformanceAnalysisResponse,
)


def test_blank_required_field_rejected():
    with pytest.raises(ValidationError):
        CustomerAnalysisInput(customer_data="   \n")


def test_accepts_camel_case_and_snake_case():
    assert GeneralAiQueryInput.model_validate({"userQuery": "hi"}).user_query == "hi"
    assert GeneralAiQueryInput.model_validate({"user_query": "hi"}).user_query == "hi"


def test_sequence_type_defaults_and_is_restricted():
    data = EmailSequenceInput(customer_trigger="Signs up", business_goal="Onboard", sequence_length="3 emails")
    assert data.sequence_type == "Welcome Series"
    with pytest.raises(ValidationError):
        EmailSequenceInput(
            sequence_type="Birthday", customer_trigger="x", business_goal="y", sequence_length="z"
        )


def test_email_response_optional_ctas():
    response = EmailContentResponse.model_validate({
        "subjectLines": [{"text": "✨ New arrivals", "emoji": True}],
        "previewText": "Fresh picks",
        "emailBodyHtml": "<p>Hi {{customer_name}}</p>",
        "ctas": {"primary": {"text": "Shop Now", "link": "#product-link"}},
    })
    assert response.ctas.secondary is None
    assert response.ctas.urgency_driven == []
    assert response.subject_lines[0].emoji is True


def test_performance_response_nested_defaults():
    response = PerformanceAnalysisResponse.model_validate({"performanceSummary": "Solid"})
    assert response.optimization_recommendations.subject_line == []
    assert response.next_campaign_strategy.winning_elements == []
    assert response.automated_follow_up_sequences is None


def test_response_serializes_with_camel_case_aliases():
    dumped = PerformanceAnalysisResponse(performance_summary="ok").model_dump(by_alias=True)
    assert "performanceSummary" in dumped
    assert "nextCampaignStrategy" in dumped
