"""Notification centre: the shared list of visible notices.

Notices are appended by any adapter and removed by their own expiry timer or
by explicit dismissal. Ids grow monotonically so two notices created in the
same millisecond never collide.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable

from kms_client.models.notifications import Notification, NotificationContent, NotificationType
from kms_client.notifications.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_DURATIONS_MS: dict[NotificationType, int] = {
    NotificationType.SUCCESS: 3000,
    NotificationType.ERROR: 5000,
    NotificationType.INFO: 3000,
    NotificationType.WARNING: 4000,
}

Listener = Callable[[list[Notification]], None]


class NotificationCenter:
    """Injectable store of visible notices.

    Args:
        scheduler: Timer used to auto-dismiss each notice.
        durations: Per-type default durations overriding ``DEFAULT_DURATIONS_MS``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        durations: dict[NotificationType, int] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._durations = {**DEFAULT_DURATIONS_MS, **(durations or {})}
        self._notifications: list[Notification] = []
        self._ids = itertools.count(1)
        self._listeners: list[Listener] = []

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the current list after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show(
        self,
        content: str | NotificationContent,
        type: NotificationType = NotificationType.INFO,
        duration_ms: int | None = None,
    ) -> Notification:
        if isinstance(content, str):
            content = NotificationContent(message=content)
        duration = self._durations[type] if duration_ms is None else duration_ms

        notification = Notification(
            id=next(self._ids),
            type=type,
            message=content.message,
            code=content.code,
            duration_ms=duration,
        )
        self._notifications.append(notification)
        logger.debug("Showing %s notice %d", type.value, notification.id)
        self._notify()

        self._scheduler.call_later(duration, lambda: self.dismiss(notification.id))
        return notification

    def success(self, content: str | NotificationContent, duration_ms: int | None = None) -> Notification:
        return self.show(content, NotificationType.SUCCESS, duration_ms)

    def error(self, content: str | NotificationContent, duration_ms: int | None = None) -> Notification:
        return self.show(content, NotificationType.ERROR, duration_ms)

    def info(self, content: str | NotificationContent, duration_ms: int | None = None) -> Notification:
        return self.show(content, NotificationType.INFO, duration_ms)

    def warning(self, content: str | NotificationContent, duration_ms: int | None = None) -> Notification:
        return self.show(content, NotificationType.WARNING, duration_ms)

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notice; returns False if it was already gone."""
        before = len(self._notifications)
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        if len(self._notifications) == before:
            return False
        self._notify()
        return True

    def clear(self) -> None:
        self._notifications = []
        self._notify()

    def _notify(self) -> None:
        snapshot = self.notifications
        for listener in list(self._listeners):
            listener(snapshot)
