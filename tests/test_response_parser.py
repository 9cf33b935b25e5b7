"""Tests for fenced JSON parsing of model completions."""
import pytest

from backend.agents.response_parser import parse_json_response, parse_model_response, strip_code_fence
from backend.app.errors import MalformedResponseError, ResponseParseError
from backend.app.models import CustomerAnalysisResponse, EmailSequenceResponse, GeneralAiResponse


class TestStripCodeFence:
    def test_plain_json_untouched(self):
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'

    def test_json_fence_removed(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence_removed(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_on_one_line(self):
        assert strip_code_fence('```json {"a": 1}```') == '{"a": 1}'

    def test_text_around_fence_is_not_stripped(self):
        text = 'Here you go:\n```json\n{"a": 1}\n```'
        assert strip_code_fence(text) == text


class TestParseJsonResponse:
    def test_parses_fenced_object(self):
        assert parse_json_response('```json\n{"responseText": "hi"}\n```') == {"responseText": "hi"}

    def test_error_text_is_reported_verbatim(self):
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_response("Error: the request was blocked")
        assert exc_info.value.message.startswith(
            "Error communicating with Gemini API: Gemini API returned an error or unparseable response: Error:"
        )

    def test_cannot_text_is_reported_verbatim(self):
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_response("I cannot help with that.")
        assert "unparseable response" in exc_info.value.message

    def test_error_text_truncated_to_200_chars(self):
        text = "error " + "x" * 400
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_response(text)
        assert exc_info.value.message.endswith(text[:200] + "...")

    def test_other_garbage_reports_decoder_details(self):
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_response("{not json")
        assert exc_info.value.message.startswith(
            "Error communicating with Gemini API: Failed to parse JSON from Gemini response."
        )
        assert "Details:" in exc_info.value.message


class TestParseModelResponse:
    def test_camel_case_keys_map_to_fields(self, customer_analysis_json):
        result = parse_model_response(customer_analysis_json, CustomerAnalysisResponse, "analyze customer data")
        assert result.profile_summary.startswith("Urban professional")
        assert result.segments == ["High-Value", "Loyal"]
        assert result.optimal_timing == "Tuesday mornings"

    def test_missing_list_fields_default_to_empty(self):
        result = parse_model_response('{"profileSummary": "x"}', CustomerAnalysisResponse, "analyze customer data")
        assert result.segments == []
        assert result.product_suggestions == []

    def test_missing_required_field_is_malformed(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_model_response('{"segments": []}', CustomerAnalysisResponse, "analyze customer data")
        assert exc_info.value.message == "Failed to analyze customer data. Response might be malformed or empty."

    def test_empty_text_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            parse_model_response("   ", GeneralAiResponse, "get a response from the AI assistant")

    def test_null_payload_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            parse_model_response("null", GeneralAiResponse, "get a response from the AI assistant")

    def test_array_payload_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            parse_model_response('[{"responseText": "hi"}]', GeneralAiResponse, "get a response")

    def test_sequence_without_emails_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            parse_model_response('{"sequenceName": "Welcome", "emails": []}', EmailSequenceResponse, "generate")

    def test_malformed_is_a_parse_error(self):
        assert issubclass(MalformedResponseError, ResponseParseError)
