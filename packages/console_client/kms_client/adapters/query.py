"""Query adapter for read operations.

Wraps a coroutine function returning an envelope and:
- unwraps ``data`` on success, dispatching feedback (after 100ms) and an
  optional success notice (after 200ms)
- on failure classifies the error, resolves the display text through the
  error-policy table and shows it (after 100ms), followed by the envelope's
  own feedback entries
- retries non-envelope failures up to ``retry_policy.max_retries`` times;
  envelope errors are never retried
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from kms_client.adapters.context import AdapterContext
from kms_client.diagnostics.error_classifier import NormalizedErrorInfo
from kms_client.diagnostics.error_tracker import ErrorTracker
from kms_client.exceptions import ApiResponseError
from kms_client.models.envelope import ApiErrorResponse, ApiSuccessResponse, parse_envelope
from kms_client.resilience.retry import QueryRetryPolicy, RetryContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryAdapter(Generic[T]):
    """Envelope-aware read operation.

    Args:
        fn: Zero-argument coroutine function returning an envelope (dict or model).
        context: Shared notification/policy collaborators.
        operation: Key into the error-policy table (e.g. ``"reviews.detail"``).
        auto_show_feedback: Dispatch the feedback entries of a successful response.
        auto_show_error: Show an error notice, then the error's feedback, on failure.
        success_message: Optional notice shown after a successful fetch.
        retry_policy: Overrides the context's retry policy.
    """

    def __init__(
        self,
        fn: Callable[[], Awaitable[Any]],
        context: AdapterContext,
        *,
        operation: str | None = None,
        auto_show_feedback: bool = True,
        auto_show_error: bool = True,
        success_message: str | None = None,
        retry_policy: QueryRetryPolicy | None = None,
    ) -> None:
        self._fn = fn
        self._context = context
        self.operation = operation
        self.auto_show_feedback = auto_show_feedback
        self.auto_show_error = auto_show_error
        self.success_message = success_message
        self.retry_policy = retry_policy or context.retry_policy
        self.errors = ErrorTracker()
        self.data: T | None = None

    async def fetch(self) -> T:
        """Run the read operation, retrying per policy.

        Raises:
            ApiResponseError: The server answered with an error envelope.
            Exception: The last non-envelope failure once retries are exhausted.
        """
        retry = RetryContext()
        self.errors.clear_error()

        while True:
            try:
                envelope = parse_envelope(await self._fn())
                if isinstance(envelope, ApiErrorResponse):
                    raise ApiResponseError(envelope)
            except Exception as exc:
                if self.retry_policy.should_retry(retry, exc):
                    delay = self.retry_policy.delay_for(retry)
                    retry = retry.after_failure()
                    self.errors.increase_retry()
                    logger.warning(
                        "Query %s failed (attempt %d/%d), retrying in %.1fs: %s",
                        self.operation or "<anonymous>",
                        retry.failure_count,
                        self.retry_policy.max_retries + 1,
                        delay,
                        exc.__class__.__name__,
                        extra={"attempt": retry.failure_count},
                    )
                    await asyncio.sleep(delay)
                    continue
                self._report_failure(exc)
                raise

            self._report_success(envelope)
            self.data = envelope.data
            return envelope.data

    def _report_success(self, envelope: ApiSuccessResponse[Any]) -> None:
        timings = self._context.timings
        if self.auto_show_feedback:
            self._context.dispatch_feedback_later(timings.query_feedback_delay_ms, envelope.feedback)
        if self.success_message:
            self._context.show_success_later(timings.query_success_delay_ms, self.success_message)

    def _report_failure(self, exc: Exception) -> NormalizedErrorInfo:
        info = self.errors.record(exc)
        timings = self._context.timings
        logger.info(
            "Query %s failed with %s",
            self.operation or "<anonymous>",
            info.code,
            extra={"error_code": info.code, "request_id": info.request_id},
        )

        if self.auto_show_error:
            message = self._context.policies.resolve(self.operation, info)
            self._context.show_error_later(timings.query_error_delay_ms, message, info.code)
            if isinstance(exc, ApiResponseError):
                self._context.dispatch_feedback_later(timings.query_error_feedback_delay_ms, exc.feedback)
        return info
