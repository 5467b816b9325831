"""Shared collaborators injected into every query/mutation adapter."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any

from kms_client.config.error_policies import ErrorPolicyRegistry
from kms_client.config.settings import ClientSettings
from kms_client.models.envelope import ApiFeedback
from kms_client.models.notifications import NotificationContent
from kms_client.notifications.center import NotificationCenter
from kms_client.notifications.feedback import FeedbackDispatcher
from kms_client.notifications.scheduler import Scheduler
from kms_client.resilience.retry import QueryRetryPolicy


@dataclass(frozen=True)
class AdapterTimings:
    """Delays (ms) that keep the notices of one call from colliding."""

    feedback_stagger_ms: int = 200
    query_feedback_delay_ms: int = 100
    query_success_delay_ms: int = 200
    query_error_delay_ms: int = 100
    query_error_feedback_delay_ms: int = 200
    mutation_feedback_delay_ms: int = 500
    mutation_error_feedback_delay_ms: int = 100

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> AdapterTimings:
        return cls(
            feedback_stagger_ms=settings.feedback_stagger_ms,
            query_feedback_delay_ms=settings.query_feedback_delay_ms,
            query_success_delay_ms=settings.query_success_delay_ms,
            query_error_delay_ms=settings.query_error_delay_ms,
            query_error_feedback_delay_ms=settings.query_error_feedback_delay_ms,
            mutation_feedback_delay_ms=settings.mutation_feedback_delay_ms,
            mutation_error_feedback_delay_ms=settings.mutation_error_feedback_delay_ms,
        )


@dataclass(frozen=True)
class AdapterContext:
    notifications: NotificationCenter
    feedback: FeedbackDispatcher
    scheduler: Scheduler
    policies: ErrorPolicyRegistry
    timings: AdapterTimings = AdapterTimings()
    retry_policy: QueryRetryPolicy = QueryRetryPolicy()
    default_success_message: str = "작업이 완료되었습니다."

    def show_error_later(self, delay_ms: int, message: str, code: str) -> None:
        content = NotificationContent(message=message, code=code)
        if delay_ms <= 0:
            self.notifications.error(content)
        else:
            self.scheduler.call_later(delay_ms, lambda: self.notifications.error(content))

    def show_success_later(self, delay_ms: int, message: str) -> None:
        if delay_ms <= 0:
            self.notifications.success(message)
        else:
            self.scheduler.call_later(delay_ms, lambda: self.notifications.success(message))

    def dispatch_feedback_later(self, delay_ms: int, feedback: list[ApiFeedback]) -> None:
        if not feedback:
            return
        entries = list(feedback)
        stagger = self.timings.feedback_stagger_ms
        self.scheduler.call_later(
            delay_ms, lambda: self.feedback.show_feedbacks(entries, stagger)
        )


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if a callback returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
