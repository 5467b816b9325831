"""Public models for the console API client."""

from kms_client.models.auth import (
    ApiUser,
    AuthTokenSet,
    AuthUser,
    LoginPayload,
    SignupPayload,
    TokenResponse,
    UserRole,
    role_label,
)
from kms_client.models.envelope import (
    NETWORK_ERROR,
    TIMEOUT,
    UNKNOWN_ERROR,
    ApiErrorCode,
    ApiErrorDetail,
    ApiErrorResponse,
    ApiFeedback,
    ApiMeta,
    ApiResponse,
    ApiSuccessResponse,
    EnvelopeFormatError,
    FeedbackLevel,
    is_api_error,
    is_api_success,
    is_error_envelope,
    parse_envelope,
)
from kms_client.models.manuals import ManualDraftCreatePayload
from kms_client.models.notifications import (
    Notification,
    NotificationContent,
    NotificationType,
)

__all__ = [
    "NETWORK_ERROR",
    "TIMEOUT",
    "UNKNOWN_ERROR",
    "ApiErrorCode",
    "ApiErrorDetail",
    "ApiErrorResponse",
    "ApiFeedback",
    "ApiMeta",
    "ApiResponse",
    "ApiSuccessResponse",
    "ApiUser",
    "AuthTokenSet",
    "AuthUser",
    "EnvelopeFormatError",
    "FeedbackLevel",
    "LoginPayload",
    "ManualDraftCreatePayload",
    "Notification",
    "NotificationContent",
    "NotificationType",
    "SignupPayload",
    "TokenResponse",
    "UserRole",
    "is_api_error",
    "is_api_success",
    "is_error_envelope",
    "parse_envelope",
    "role_label",
]
