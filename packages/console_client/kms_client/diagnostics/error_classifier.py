"""Centralized error classification for API calls.

Every failure an adapter can observe is reduced to one ``NormalizedErrorInfo``
whose ``origin`` is one of three closed variants:

- envelope: an ``ApiResponseError`` built from a failed envelope
- transport: a raw ``httpx`` error (network, timeout, non-enveloped status)
- unknown: anything else

Category predicates are derived purely from the dotted ``code``.

Typical codes:
- AUTH.EXPIRED_TOKEN, VALIDATION.ERROR, RESOURCE.NOT_FOUND (from envelopes)
- NETWORK_ERROR, TIMEOUT, HTTP_<status> (transport)
- UNKNOWN_ERROR
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel

from kms_client.exceptions import ApiResponseError
from kms_client.models.envelope import NETWORK_ERROR, TIMEOUT, UNKNOWN_ERROR


class ErrorOrigin(str, Enum):
    ENVELOPE = "envelope"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class NormalizedErrorInfo(BaseModel):
    origin: ErrorOrigin
    code: str
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None
    request_id: str | None = None
    timestamp: str | None = None
    status_code: int | None = None


def _response_details(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        body = response.text or None
    if body is None:
        return None
    return body if isinstance(body, dict) else {"body": body}


def classify(error: BaseException) -> NormalizedErrorInfo:
    """Normalize any raised error. Never raises; falls back to UNKNOWN_ERROR."""
    if isinstance(error, ApiResponseError):
        return NormalizedErrorInfo(
            origin=ErrorOrigin.ENVELOPE,
            code=error.code,
            message=error.message,
            hint=error.hint,
            details=error.details,
            request_id=error.request_id or None,
            timestamp=error.timestamp or None,
            status_code=error.status_code,
        )

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return NormalizedErrorInfo(
            origin=ErrorOrigin.TRANSPORT,
            code=f"HTTP_{status}",
            message=f"Request failed with status code {status}",
            details=_response_details(error.response),
            status_code=status,
        )

    if isinstance(error, httpx.TimeoutException):
        return NormalizedErrorInfo(
            origin=ErrorOrigin.TRANSPORT, code=TIMEOUT, message=str(error) or "Request timed out"
        )

    if isinstance(error, httpx.HTTPError):
        return NormalizedErrorInfo(
            origin=ErrorOrigin.TRANSPORT,
            code=NETWORK_ERROR,
            message=str(error) or "Network error",
        )

    return NormalizedErrorInfo(
        origin=ErrorOrigin.UNKNOWN, code=UNKNOWN_ERROR, message=str(error)
    )


def _family(code: str) -> str:
    return code.split(".", 1)[0] if "." in code else ""


def is_auth_error(code: str) -> bool:
    return _family(code) == "AUTH"


def is_validation_error(code: str) -> bool:
    return _family(code) == "VALIDATION"


def is_resource_error(code: str) -> bool:
    return _family(code) == "RESOURCE"


def is_server_error(code: str) -> bool:
    return _family(code) in ("SERVER", "SERVICE")


def is_retryable(code: str) -> bool:
    return is_server_error(code) or code == NETWORK_ERROR
