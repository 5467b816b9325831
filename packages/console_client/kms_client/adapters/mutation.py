"""Mutation adapter for write operations.

Same unwrap/classify logic as the query adapter, but the success notice is
shown immediately, callbacks run after the adapter's own notices, and
nothing is retried: writes are assumed non-idempotent.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from kms_client.adapters.context import AdapterContext, maybe_await
from kms_client.diagnostics.error_classifier import NormalizedErrorInfo
from kms_client.diagnostics.error_tracker import ErrorTracker
from kms_client.exceptions import ApiResponseError
from kms_client.models.envelope import ApiErrorResponse, ApiFeedback, parse_envelope

logger = logging.getLogger(__name__)

V = TypeVar("V")
T = TypeVar("T")

_DEFAULT = object()

SuccessCallback = Callable[[Any, list[ApiFeedback]], Any]
ErrorCallback = Callable[[NormalizedErrorInfo], Any]


class MutationAdapter(Generic[V, T]):
    """Envelope-aware write operation.

    ``success_message`` defaults to the context's generic completion text;
    pass ``None`` to show no success notice. ``on_api_success`` receives
    ``(data, feedback)`` and ``on_api_error`` the normalized error; both may
    be plain functions or coroutines. An exception raised by ``on_api_error``
    is logged and the caller still receives the original failure.
    """

    def __init__(
        self,
        fn: Callable[[V], Awaitable[Any]],
        context: AdapterContext,
        *,
        operation: str | None = None,
        auto_show_feedback: bool = True,
        auto_show_error: bool = True,
        success_message: Any = _DEFAULT,
        on_api_success: SuccessCallback | None = None,
        on_api_error: ErrorCallback | None = None,
    ) -> None:
        self._fn = fn
        self._context = context
        self.operation = operation
        self.auto_show_feedback = auto_show_feedback
        self.auto_show_error = auto_show_error
        self.success_message: str | None = (
            context.default_success_message if success_message is _DEFAULT else success_message
        )
        self.on_api_success = on_api_success
        self.on_api_error = on_api_error
        self.errors = ErrorTracker()
        self.pending = False

    async def mutate(self, variables: V) -> T:
        """Run the write once and return the envelope data.

        Raises:
            ApiResponseError: The server answered with an error envelope.
            Exception: Any other failure, after notices and ``on_api_error``.
        """
        self.errors.clear_error()
        self.pending = True
        try:
            envelope = parse_envelope(await self._fn(variables))
            if isinstance(envelope, ApiErrorResponse):
                raise ApiResponseError(envelope)
        except Exception as exc:
            info = self._report_failure(exc)
            if self.on_api_error is not None:
                await self._run_error_callback(info)
            raise
        finally:
            self.pending = False

        if self.success_message:
            self._context.notifications.success(self.success_message)
        if self.auto_show_feedback:
            self._context.dispatch_feedback_later(
                self._context.timings.mutation_feedback_delay_ms, envelope.feedback
            )
        if self.on_api_success is not None:
            await maybe_await(self.on_api_success(envelope.data, list(envelope.feedback)))
        return envelope.data

    async def _run_error_callback(self, info: NormalizedErrorInfo) -> None:
        # The caller always receives the original failure
        try:
            await maybe_await(self.on_api_error(info))
        except Exception:
            logger.exception(
                "on_api_error callback failed for mutation %s",
                self.operation or "<anonymous>",
                extra={"error_code": info.code},
            )

    def _report_failure(self, exc: Exception) -> NormalizedErrorInfo:
        info = self.errors.record(exc)
        logger.info(
            "Mutation %s failed with %s",
            self.operation or "<anonymous>",
            info.code,
            extra={"error_code": info.code, "request_id": info.request_id},
        )

        if self.auto_show_error:
            message = self._context.policies.resolve(self.operation, info)
            self._context.show_error_later(0, message, info.code)
            if isinstance(exc, ApiResponseError):
                self._context.dispatch_feedback_later(
                    self._context.timings.mutation_error_feedback_delay_ms, exc.feedback
                )
        return info
