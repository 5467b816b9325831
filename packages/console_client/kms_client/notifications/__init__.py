"""User-facing notices: timers, notification centre and feedback dispatcher."""

from kms_client.notifications.center import DEFAULT_DURATIONS_MS, NotificationCenter
from kms_client.notifications.feedback import DEFAULT_FEEDBACK_DURATIONS_MS, FeedbackDispatcher
from kms_client.notifications.scheduler import AsyncioScheduler, Scheduler

__all__ = [
    "DEFAULT_DURATIONS_MS",
    "DEFAULT_FEEDBACK_DURATIONS_MS",
    "AsyncioScheduler",
    "FeedbackDispatcher",
    "NotificationCenter",
    "Scheduler",
]
