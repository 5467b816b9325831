"""Shared test fixtures for the console client test suite."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from kms_client.adapters.context import AdapterContext
from kms_client.auth.storage import MemoryStorage
from kms_client.auth.token_store import TokenStore
from kms_client.config.error_policies import ErrorPolicyRegistry
from kms_client.config.settings import ClientSettings
from kms_client.main import Console, create_console
from kms_client.notifications.center import NotificationCenter
from kms_client.notifications.feedback import FeedbackDispatcher

BASE_URL = "http://kms.test"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


@dataclass(order=True)
class _Timer:
    due_ms: float
    seq: int
    callback: Callable[[], object] = field(compare=False)


class ManualScheduler:
    """Fake clock: callbacks run only when the test advances time."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._timers: list[_Timer] = []
        self._seq = itertools.count()
        self.scheduled: list[float] = []  # requested delays, in call order

    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None:
        self.scheduled.append(delay_ms)
        heapq.heappush(self._timers, _Timer(self.now_ms + max(delay_ms, 0), next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._timers)

    def advance(self, ms: float) -> None:
        target = self.now_ms + ms
        while self._timers and self._timers[0].due_ms <= target:
            timer = heapq.heappop(self._timers)
            self.now_ms = timer.due_ms
            timer.callback()
        self.now_ms = target

    def run_all(self) -> None:
        while self._timers:
            self.advance(self._timers[0].due_ms - self.now_ms)


class RecordingNavigator:
    def __init__(self) -> None:
        self.redirects: list[str] = []

    def redirect(self, location: str) -> None:
        self.redirects.append(location)


# ---------------------------------------------------------------------------
# Envelope builders
# ---------------------------------------------------------------------------


def success_body(data: Any, feedback: list[dict] | None = None, request_id: str = "req-1") -> dict:
    return {
        "success": True,
        "data": data,
        "error": None,
        "meta": {"requestId": request_id, "timestamp": "2025-01-01T00:00:00Z"},
        "feedback": feedback or [],
    }


def error_body(
    code: str,
    message: str = "error",
    hint: str | None = None,
    details: dict | None = None,
    feedback: list[dict] | None = None,
    request_id: str = "req-err",
) -> dict:
    error: dict = {"code": code, "message": message}
    if hint is not None:
        error["hint"] = hint
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "data": None,
        "error": error,
        "meta": {"requestId": request_id, "timestamp": "2025-01-01T00:00:00Z"},
        "feedback": feedback or [],
    }


@pytest.fixture
def make_success() -> Callable[..., dict]:
    return success_body


@pytest.fixture
def make_error() -> Callable[..., dict]:
    return error_body


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with zero retry backoff."""
    return ClientSettings(
        base_url=BASE_URL,
        retry_base_delay_seconds=0,
        retry_max_delay_seconds=0,
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> TokenStore:
    return TokenStore(storage)


@pytest.fixture
def center(scheduler: ManualScheduler) -> NotificationCenter:
    return NotificationCenter(scheduler)


@pytest.fixture
def dispatcher(center: NotificationCenter, scheduler: ManualScheduler) -> FeedbackDispatcher:
    return FeedbackDispatcher(center, scheduler)


@pytest.fixture
def policies() -> ErrorPolicyRegistry:
    return ErrorPolicyRegistry()


@pytest.fixture
def adapter_context(
    center: NotificationCenter,
    dispatcher: FeedbackDispatcher,
    scheduler: ManualScheduler,
    policies: ErrorPolicyRegistry,
) -> AdapterContext:
    return AdapterContext(
        notifications=center,
        feedback=dispatcher,
        scheduler=scheduler,
        policies=policies,
    )


@pytest.fixture
def build_console(
    settings: ClientSettings,
    storage: MemoryStorage,
    navigator: RecordingNavigator,
    scheduler: ManualScheduler,
) -> Callable[..., Console]:
    """Factory: a Console whose HTTP traffic goes to ``handler`` or ``transport``."""

    def _build(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Console:
        if transport is None:
            transport = httpx.MockTransport(handler)
        return create_console(
            settings,
            storage=storage,
            navigator=navigator,
            transport=transport,
            scheduler=scheduler,
        )

    return _build
