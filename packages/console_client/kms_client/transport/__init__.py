"""HTTP transport and envelope handling."""

from kms_client.transport.client import ApiClient, RequestSpec, needs_token_refresh
from kms_client.transport.response_handler import (
    extract_success,
    extract_with_feedback,
    group_feedbacks_by_level,
    unwrap_optional_envelope,
    user_friendly_message,
)

__all__ = [
    "ApiClient",
    "RequestSpec",
    "extract_success",
    "extract_with_feedback",
    "group_feedbacks_by_level",
    "needs_token_refresh",
    "unwrap_optional_envelope",
    "user_friendly_message",
]
