"""Response envelope models.

Every console endpoint wraps its payload in the same JSON envelope:

    success: { success: true,  data: T,    error: null,   meta, feedback }
    error:   { success: false, data: null, error: detail, meta, feedback }

Exactly one of ``data`` / ``error`` is meaningful, discriminated by ``success``.
Wire names are camelCase; the models accept either spelling and serialise
with aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kms_client.exceptions import EnvelopeFormatError

T = TypeVar("T")


class ApiErrorCode(str, Enum):
    """Dotted error codes shared with the backend."""

    AUTH_INVALID_TOKEN = "AUTH.INVALID_TOKEN"
    AUTH_EXPIRED_TOKEN = "AUTH.EXPIRED_TOKEN"
    AUTH_REQUIRED = "AUTH.REQUIRED"
    AUTH_FORBIDDEN = "AUTH.FORBIDDEN"

    VALIDATION_ERROR = "VALIDATION.ERROR"
    INVALID_INPUT = "VALIDATION.INVALID_INPUT"

    RESOURCE_NOT_FOUND = "RESOURCE.NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE.CONFLICT"
    RESOURCE_ALREADY_EXISTS = "RESOURCE.ALREADY_EXISTS"

    SERVER_ERROR = "SERVER.ERROR"
    SERVICE_UNAVAILABLE = "SERVICE.UNAVAILABLE"


# Client-side codes for failures that never produced an envelope
NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT = "TIMEOUT"
UNKNOWN_ERROR = "UNKNOWN_ERROR"

TOKEN_REFRESH_CODES = frozenset(
    {ApiErrorCode.AUTH_EXPIRED_TOKEN.value, ApiErrorCode.AUTH_INVALID_TOKEN.value}
)


class FeedbackLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ApiMeta(_WireModel):
    """Correlation data attached to every envelope."""

    request_id: str = Field(default="", alias="requestId")
    timestamp: str = ""


class ApiFeedback(_WireModel):
    """Secondary notice that may accompany any response."""

    code: str
    level: FeedbackLevel
    message: str


class ApiErrorDetail(_WireModel):
    """Error block of a failed envelope. ``hint`` is the user-facing text."""

    code: str
    message: str
    details: dict[str, Any] | None = None
    hint: str | None = None


class ApiSuccessResponse(_WireModel, Generic[T]):
    success: Literal[True] = True
    data: T
    error: None = None
    meta: ApiMeta = Field(default_factory=ApiMeta)
    feedback: list[ApiFeedback] = Field(default_factory=list)


class ApiErrorResponse(_WireModel):
    success: Literal[False] = False
    data: None = None
    error: ApiErrorDetail
    meta: ApiMeta = Field(default_factory=ApiMeta)
    feedback: list[ApiFeedback] = Field(default_factory=list)


ApiResponse = Union[ApiSuccessResponse[Any], ApiErrorResponse]


def is_api_success(response: ApiResponse) -> bool:
    return response.success is True


def is_api_error(response: ApiResponse) -> bool:
    return response.success is False


def parse_envelope(body: Any) -> ApiResponse:
    """Turn a decoded JSON body (or an already parsed model) into an envelope.

    Raises
    ------
    EnvelopeFormatError
        If ``body`` is not a success or error envelope.
    """
    if isinstance(body, (ApiSuccessResponse, ApiErrorResponse)):
        return body
    if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
        raise EnvelopeFormatError("Response body is not an API envelope")

    model: type[BaseModel] = ApiSuccessResponse[Any] if body["success"] else ApiErrorResponse
    try:
        return model.model_validate(body)  # type: ignore[return-value]
    except ValidationError as exc:
        raise EnvelopeFormatError(f"Malformed API envelope: {exc}") from exc


def as_error_envelope(body: Any) -> ApiErrorResponse | None:
    """Return the error envelope held by ``body``, or None if it is not one."""
    if not isinstance(body, dict) or body.get("success") is not False or "error" not in body:
        return None
    try:
        return ApiErrorResponse.model_validate(body)
    except ValidationError:
        return None


def is_error_envelope(body: Any) -> bool:
    return as_error_envelope(body) is not None
