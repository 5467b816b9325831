"""Feedback dispatcher.

Turns the ``feedback`` entries of a response into leveled notices. Each
entry is shown as its own notice, never merged; a list is staggered so that
entry *i* appears at ``i * stagger_ms``.
"""

from __future__ import annotations

from functools import partial

from kms_client.models.envelope import ApiFeedback, FeedbackLevel
from kms_client.models.notifications import NotificationContent, NotificationType
from kms_client.notifications.center import NotificationCenter
from kms_client.notifications.scheduler import Scheduler

DEFAULT_FEEDBACK_DURATIONS_MS: dict[FeedbackLevel, int] = {
    FeedbackLevel.INFO: 3000,
    FeedbackLevel.WARNING: 4000,
    FeedbackLevel.ERROR: 5000,
}

_CHANNELS = {
    FeedbackLevel.INFO: NotificationType.INFO,
    FeedbackLevel.WARNING: NotificationType.WARNING,
    FeedbackLevel.ERROR: NotificationType.ERROR,
}


class FeedbackDispatcher:
    def __init__(
        self,
        center: NotificationCenter,
        scheduler: Scheduler,
        durations: dict[FeedbackLevel, int] | None = None,
    ) -> None:
        self._center = center
        self._scheduler = scheduler
        self._durations = {**DEFAULT_FEEDBACK_DURATIONS_MS, **(durations or {})}

    def duration_for(self, level: FeedbackLevel) -> int:
        return self._durations[level]

    def show_feedback(self, feedback: ApiFeedback) -> None:
        self._center.show(
            NotificationContent(message=feedback.message, code=feedback.code),
            _CHANNELS[feedback.level],
            self._durations[feedback.level],
        )

    def show_feedbacks(self, feedbacks: list[ApiFeedback], stagger_ms: int = 0) -> None:
        for index, feedback in enumerate(feedbacks):
            self._scheduler.call_later(index * stagger_ms, partial(self.show_feedback, feedback))

    def show_feedbacks_by_level(
        self, feedbacks: list[ApiFeedback], level: FeedbackLevel, stagger_ms: int = 0
    ) -> None:
        self.show_feedbacks([f for f in feedbacks if f.level == level], stagger_ms)

    def show_errors(self, feedbacks: list[ApiFeedback]) -> None:
        self.show_feedbacks_by_level(feedbacks, FeedbackLevel.ERROR)

    def show_warnings(self, feedbacks: list[ApiFeedback]) -> None:
        self.show_feedbacks_by_level(feedbacks, FeedbackLevel.WARNING)

    def show_infos(self, feedbacks: list[ApiFeedback]) -> None:
        self.show_feedbacks_by_level(feedbacks, FeedbackLevel.INFO)
