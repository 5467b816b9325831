"""Per-consumer error state: the last classified error plus a retry counter."""

from __future__ import annotations

import logging

from kms_client.diagnostics.error_classifier import (
    NormalizedErrorInfo,
    classify,
    is_auth_error,
    is_resource_error,
    is_retryable,
    is_server_error,
    is_validation_error,
)
from kms_client.models.envelope import ApiErrorCode

logger = logging.getLogger(__name__)


class ErrorTracker:
    """Holds the most recent error of one adapter or screen.

    The retry counter only grows until ``clear_error()`` resets it.
    """

    def __init__(self) -> None:
        self._error: NormalizedErrorInfo | None = None
        self._retry_count = 0

    @property
    def error(self) -> NormalizedErrorInfo | None:
        return self._error

    @property
    def has_error(self) -> bool:
        return self._error is not None

    @property
    def retry_count(self) -> int:
        return self._retry_count

    def record(self, error: BaseException | NormalizedErrorInfo) -> NormalizedErrorInfo:
        """Classify ``error`` (unless already normalized) and keep it as current."""
        info = error if isinstance(error, NormalizedErrorInfo) else classify(error)
        self._error = info
        logger.debug(
            "Recorded %s error %s",
            info.origin.value,
            info.code,
            extra={"error_code": info.code, "request_id": info.request_id},
        )
        return info

    def clear_error(self) -> None:
        self._error = None
        self._retry_count = 0

    def increase_retry(self) -> int:
        self._retry_count += 1
        return self._retry_count

    def is_max_retry_reached(self, max_retries: int = 3) -> bool:
        return self._retry_count >= max_retries

    def is_error_code(self, code: ApiErrorCode | str) -> bool:
        if self._error is None:
            return False
        expected = code.value if isinstance(code, ApiErrorCode) else code
        return self._error.code == expected

    def is_auth_error(self) -> bool:
        return self._error is not None and is_auth_error(self._error.code)

    def is_validation_error(self) -> bool:
        return self._error is not None and is_validation_error(self._error.code)

    def is_resource_error(self) -> bool:
        return self._error is not None and is_resource_error(self._error.code)

    def is_server_error(self) -> bool:
        return self._error is not None and is_server_error(self._error.code)

    def is_retryable(self) -> bool:
        return self._error is not None and is_retryable(self._error.code)
