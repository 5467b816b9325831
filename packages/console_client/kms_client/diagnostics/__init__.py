"""Error classification and tracking."""

from kms_client.diagnostics.error_classifier import (
    ErrorOrigin,
    NormalizedErrorInfo,
    classify,
    is_auth_error,
    is_resource_error,
    is_retryable,
    is_server_error,
    is_validation_error,
)
from kms_client.diagnostics.error_tracker import ErrorTracker

__all__ = [
    "ErrorOrigin",
    "ErrorTracker",
    "NormalizedErrorInfo",
    "classify",
    "is_auth_error",
    "is_resource_error",
    "is_retryable",
    "is_server_error",
    "is_validation_error",
]
