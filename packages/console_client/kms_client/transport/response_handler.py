"""Helpers that unwrap envelopes into data or typed errors."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from kms_client.exceptions import ApiResponseError
from kms_client.models.envelope import (
    ApiErrorResponse,
    ApiFeedback,
    ApiMeta,
    ApiResponse,
    FeedbackLevel,
    parse_envelope,
)


def extract_success(response: ApiResponse | dict[str, Any]) -> Any:
    """Return ``data`` of a success envelope.

    Raises
    ------
    ApiResponseError
        If the envelope is an error envelope.
    EnvelopeFormatError
        If ``response`` is not an envelope at all.
    """
    envelope = parse_envelope(response)
    if isinstance(envelope, ApiErrorResponse):
        raise ApiResponseError(envelope)
    return envelope.data


def extract_with_feedback(
    response: ApiResponse | dict[str, Any],
) -> tuple[Any, list[ApiFeedback], ApiMeta]:
    """Like ``extract_success`` but also returns the feedback list and meta."""
    envelope = parse_envelope(response)
    if isinstance(envelope, ApiErrorResponse):
        raise ApiResponseError(envelope)
    return envelope.data, list(envelope.feedback), envelope.meta


def unwrap_optional_envelope(body: Any) -> Any:
    """Return ``data`` when ``body`` is enveloped, otherwise ``body`` itself.

    Used for legacy endpoints (login, refresh) that may answer either way.
    """
    if isinstance(body, dict) and isinstance(body.get("success"), bool):
        return extract_success(body)
    return body


def user_friendly_message(error: ApiResponseError | ApiErrorResponse) -> str:
    if isinstance(error, ApiResponseError):
        return error.hint or error.message
    return error.error.hint or error.error.message


def group_feedbacks_by_level(
    feedbacks: list[ApiFeedback],
) -> dict[FeedbackLevel, list[ApiFeedback]]:
    grouped: dict[FeedbackLevel, list[ApiFeedback]] = defaultdict(list)
    for feedback in feedbacks:
        grouped[feedback.level].append(feedback)
    return dict(grouped)
