"""Unit tests for envelope models and the response handler."""

from __future__ import annotations

import pytest

from kms_client.exceptions import ApiResponseError, EnvelopeFormatError
from kms_client.models.envelope import (
    ApiErrorCode,
    ApiErrorResponse,
    ApiFeedback,
    ApiSuccessResponse,
    FeedbackLevel,
    as_error_envelope,
    is_api_error,
    is_api_success,
    is_error_envelope,
    parse_envelope,
)
from kms_client.transport.response_handler import (
    extract_success,
    extract_with_feedback,
    group_feedbacks_by_level,
    unwrap_optional_envelope,
    user_friendly_message,
)


class TestParseEnvelope:
    def test_parses_success_envelope(self, make_success) -> None:
        envelope = parse_envelope(make_success({"id": 1}))

        assert isinstance(envelope, ApiSuccessResponse)
        assert is_api_success(envelope)
        assert envelope.data == {"id": 1}
        assert envelope.meta.request_id == "req-1"

    def test_parses_error_envelope(self, make_error) -> None:
        envelope = parse_envelope(make_error("RESOURCE.NOT_FOUND", "missing", hint="없음"))

        assert isinstance(envelope, ApiErrorResponse)
        assert is_api_error(envelope)
        assert envelope.error.code == "RESOURCE.NOT_FOUND"
        assert envelope.error.hint == "없음"

    def test_already_parsed_model_passes_through(self, make_success) -> None:
        envelope = parse_envelope(make_success([1, 2]))
        assert parse_envelope(envelope) is envelope

    @pytest.mark.parametrize("body", [None, [], "text", {"data": 1}, {"success": "yes"}])
    def test_rejects_non_envelopes(self, body) -> None:
        with pytest.raises(EnvelopeFormatError):
            parse_envelope(body)

    def test_rejects_error_envelope_without_error_block(self) -> None:
        with pytest.raises(EnvelopeFormatError, match="Malformed"):
            parse_envelope({"success": False, "data": None, "error": None})

    def test_serialises_with_wire_names(self, make_success) -> None:
        envelope = parse_envelope(make_success(None, request_id="abc"))
        dumped = envelope.model_dump(by_alias=True)

        assert dumped["meta"]["requestId"] == "abc"
        assert dumped["error"] is None

    def test_missing_meta_and_feedback_default_empty(self) -> None:
        envelope = parse_envelope({"success": True, "data": 5})

        assert envelope.meta.request_id == ""
        assert envelope.feedback == []


class TestErrorEnvelopeDetection:
    def test_detects_error_envelope(self, make_error) -> None:
        assert is_error_envelope(make_error("SERVER.ERROR"))
        assert as_error_envelope(make_error("SERVER.ERROR")).error.code == "SERVER.ERROR"

    def test_success_envelope_is_not_error(self, make_success) -> None:
        assert as_error_envelope(make_success({})) is None

    def test_plain_body_is_not_error(self) -> None:
        assert as_error_envelope({"detail": "Not authenticated"}) is None
        assert as_error_envelope(None) is None


class TestExtractSuccess:
    def test_returns_data(self, make_success) -> None:
        assert extract_success(make_success({"name": "manual"})) == {"name": "manual"}

    def test_raises_api_response_error_with_envelope_fields(self, make_error) -> None:
        feedback = [{"code": "F1", "level": "warning", "message": "check"}]
        body = make_error(
            "VALIDATION.ERROR",
            "bad input",
            hint="입력값을 확인하세요",
            details={"field": "name"},
            feedback=feedback,
            request_id="req-9",
        )

        with pytest.raises(ApiResponseError) as exc_info:
            extract_success(body)

        err = exc_info.value
        assert err.code == "VALIDATION.ERROR"
        assert err.message == "bad input"
        assert err.hint == "입력값을 확인하세요"
        assert err.details == {"field": "name"}
        assert err.request_id == "req-9"
        assert err.timestamp == "2025-01-01T00:00:00Z"
        assert [f.code for f in err.feedback] == ["F1"]
        assert str(err) == "[VALIDATION.ERROR] bad input"

    def test_extract_with_feedback(self, make_success) -> None:
        feedback = [{"code": "SAVED_WITH_WARN", "level": "warning", "message": "partial"}]
        data, entries, meta = extract_with_feedback(make_success({"id": 3}, feedback=feedback))

        assert data == {"id": 3}
        assert entries[0].level == FeedbackLevel.WARNING
        assert meta.request_id == "req-1"


class TestHelpers:
    def test_unwrap_optional_envelope_handles_both_forms(self, make_success) -> None:
        assert unwrap_optional_envelope(make_success({"accessToken": "a"})) == {"accessToken": "a"}
        assert unwrap_optional_envelope({"accessToken": "b"}) == {"accessToken": "b"}

    def test_unwrap_optional_envelope_raises_on_error_envelope(self, make_error) -> None:
        with pytest.raises(ApiResponseError):
            unwrap_optional_envelope(make_error("AUTH.INVALID_TOKEN"))

    def test_user_friendly_message_prefers_hint(self, make_error) -> None:
        envelope = parse_envelope(make_error("X.Y", "raw", hint="friendly"))
        assert user_friendly_message(envelope) == "friendly"
        assert user_friendly_message(ApiResponseError(envelope)) == "friendly"

    def test_user_friendly_message_falls_back_to_message(self, make_error) -> None:
        envelope = parse_envelope(make_error("X.Y", "raw"))
        assert user_friendly_message(ApiResponseError(envelope)) == "raw"

    def test_group_feedbacks_by_level(self) -> None:
        entries = [
            ApiFeedback(code="a", level=FeedbackLevel.INFO, message="1"),
            ApiFeedback(code="b", level=FeedbackLevel.ERROR, message="2"),
            ApiFeedback(code="c", level=FeedbackLevel.INFO, message="3"),
        ]
        grouped = group_feedbacks_by_level(entries)

        assert [f.code for f in grouped[FeedbackLevel.INFO]] == ["a", "c"]
        assert [f.code for f in grouped[FeedbackLevel.ERROR]] == ["b"]
        assert FeedbackLevel.WARNING not in grouped


def test_error_code_constants_match_wire_values() -> None:
    assert ApiErrorCode.AUTH_EXPIRED_TOKEN.value == "AUTH.EXPIRED_TOKEN"
    assert ApiErrorCode.INVALID_INPUT.value == "VALIDATION.INVALID_INPUT"
    assert ApiErrorCode.SERVICE_UNAVAILABLE.value == "SERVICE.UNAVAILABLE"
    assert len(ApiErrorCode) == 11
