"""Hard navigation used when authentication cannot be recovered."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    def redirect(self, location: str) -> None: ...


class LoggingNavigator:
    """Logs the redirect and hands it to ``on_redirect`` (e.g. a full page reload)."""

    def __init__(self, on_redirect: Callable[[str], None] | None = None) -> None:
        self._on_redirect = on_redirect

    def redirect(self, location: str) -> None:
        logger.warning("Redirecting to %s after unrecoverable auth failure", location)
        if self._on_redirect is not None:
            self._on_redirect(location)
