"""Notification models consumed by the UI layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class NotificationContent:
    """Text of a notice, optionally tagged with the error/feedback code."""

    message: str
    code: str | None = None


@dataclass(frozen=True)
class Notification:
    id: int
    type: NotificationType
    message: str
    code: str | None = None
    duration_ms: int = 3000
