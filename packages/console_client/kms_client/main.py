"""Composition root: wires settings, auth state, transport and notices.

Startup: load settings, configure logging, open the token storage,
build the shared ``httpx.AsyncClient``, refresher, API client, notification
centre, feedback dispatcher and error-policy table.
Shutdown: ``await console.aclose()`` (or ``async with``) closes the HTTP client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from kms_client.adapters.context import AdapterContext, AdapterTimings
from kms_client.adapters.mutation import MutationAdapter
from kms_client.adapters.query import QueryAdapter
from kms_client.api.auth import AuthApi, Session
from kms_client.api.manuals import ManualsApi
from kms_client.auth.navigation import LoggingNavigator, Navigator
from kms_client.auth.refresher import TokenRefresher
from kms_client.auth.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from kms_client.auth.token_store import TokenStore
from kms_client.config.error_policies import ErrorPolicyRegistry, load_error_policies
from kms_client.config.settings import ClientSettings
from kms_client.logging_config import configure_logging
from kms_client.models.envelope import FeedbackLevel
from kms_client.models.notifications import NotificationType
from kms_client.notifications.center import NotificationCenter
from kms_client.notifications.feedback import FeedbackDispatcher
from kms_client.notifications.scheduler import AsyncioScheduler, Scheduler
from kms_client.resilience.retry import QueryRetryPolicy
from kms_client.transport.client import ApiClient

logger = logging.getLogger(__name__)


@dataclass
class Console:
    """Everything a UI layer needs to talk to the console API."""

    settings: ClientSettings
    store: TokenStore
    navigator: Navigator
    refresher: TokenRefresher
    client: ApiClient
    notifications: NotificationCenter
    feedback: FeedbackDispatcher
    policies: ErrorPolicyRegistry
    adapters: AdapterContext
    auth: AuthApi
    manuals: ManualsApi
    session: Session

    def query(self, fn: Callable[[], Awaitable[Any]], **options: Any) -> QueryAdapter[Any]:
        return QueryAdapter(fn, self.adapters, **options)

    def mutation(self, fn: Callable[[Any], Awaitable[Any]], **options: Any) -> MutationAdapter[Any, Any]:
        return MutationAdapter(fn, self.adapters, **options)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Console:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_console(
    settings: ClientSettings | None = None,
    *,
    storage: KeyValueStorage | None = None,
    navigator: Navigator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    scheduler: Scheduler | None = None,
) -> Console:
    """Build a fully wired ``Console``.

    ``transport`` lets tests route HTTP traffic to a mock or an ASGI app.
    """
    settings = settings or ClientSettings()
    configure_logging(settings.log_level, json_format=settings.json_logs)

    if storage is None:
        storage = (
            JsonFileStorage(settings.token_storage_path)
            if settings.token_storage_path
            else MemoryStorage()
        )
    store = TokenStore(storage)
    navigator = navigator or LoggingNavigator()
    scheduler = scheduler or AsyncioScheduler()

    http = httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=settings.request_timeout_seconds,
        headers={"Content-Type": "application/json"},
        transport=transport,
    )
    refresher = TokenRefresher(
        http,
        store,
        navigator,
        refresh_path=settings.refresh_path,
        login_route=settings.login_route,
        timeout_seconds=settings.request_timeout_seconds,
    )
    client = ApiClient(http, store, refresher)

    notifications = NotificationCenter(
        scheduler,
        durations={
            NotificationType.SUCCESS: settings.success_duration_ms,
            NotificationType.INFO: settings.info_duration_ms,
            NotificationType.WARNING: settings.warning_duration_ms,
            NotificationType.ERROR: settings.error_duration_ms,
        },
    )
    feedback = FeedbackDispatcher(
        notifications,
        scheduler,
        durations={
            FeedbackLevel.INFO: settings.info_duration_ms,
            FeedbackLevel.WARNING: settings.warning_duration_ms,
            FeedbackLevel.ERROR: settings.error_duration_ms,
        },
    )
    policies = load_error_policies(
        settings.error_policies_path, fallback_message=settings.fallback_error_message
    )
    adapters = AdapterContext(
        notifications=notifications,
        feedback=feedback,
        scheduler=scheduler,
        policies=policies,
        timings=AdapterTimings.from_settings(settings),
        retry_policy=QueryRetryPolicy(
            max_retries=settings.query_max_retries,
            base_delay_seconds=settings.retry_base_delay_seconds,
            max_delay_seconds=settings.retry_max_delay_seconds,
        ),
        default_success_message=settings.default_success_message,
    )
    auth = AuthApi(client)

    logger.info("Console client ready for %s", settings.base_url)
    return Console(
        settings=settings,
        store=store,
        navigator=navigator,
        refresher=refresher,
        client=client,
        notifications=notifications,
        feedback=feedback,
        policies=policies,
        adapters=adapters,
        auth=auth,
        manuals=ManualsApi(client, draft_timeout_seconds=settings.long_request_timeout_seconds),
        session=Session(store, auth),
    )
