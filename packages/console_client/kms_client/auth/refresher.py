"""Access-token refresh with single-flight semantics.

Calls POST /api/v1/auth/refresh with ``{"refreshToken": ...}`` and stores
the returned access token. The endpoint may answer with an envelope or a
bare body, and with ``accessToken`` or ``access_token``.

If the refresh fails for any reason the stored tokens are cleared, the
navigator performs one hard redirect to the login route and the error is
re-raised to every caller waiting on the refresh.

SECURITY: Never logs token values.
"""

from __future__ import annotations

import logging
import time

import httpx

from kms_client.auth.navigation import Navigator
from kms_client.auth.token_store import TokenStore
from kms_client.exceptions import ApiResponseError, ClientError, TokenRefreshError
from kms_client.models.envelope import as_error_envelope
from kms_client.resilience.single_flight import SingleFlight
from kms_client.transport.response_handler import unwrap_optional_envelope

logger = logging.getLogger(__name__)


class TokenRefresher:
    """Exchanges the stored refresh token for a new access token.

    Parameters
    ----------
    http:
        The shared ``httpx.AsyncClient``; the refresh call bypasses the
        auth retry flow of ``ApiClient``.
    store:
        Token store read for the refresh token and written with the result.
    navigator:
        Receives the login-route redirect on failure.
    refresh_path:
        Path of the refresh endpoint.
    login_route:
        Redirect target after an unrecoverable failure.
    timeout_seconds:
        HTTP timeout of the refresh call.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        store: TokenStore,
        navigator: Navigator,
        refresh_path: str = "/api/v1/auth/refresh",
        login_route: str = "/login",
        timeout_seconds: float = 30.0,
    ) -> None:
        self._http = http
        self._store = store
        self._navigator = navigator
        self._refresh_path = refresh_path
        self._login_route = login_route
        self._timeout_seconds = timeout_seconds
        self._flight: SingleFlight[str] = SingleFlight("token refresh")

    @property
    def in_progress(self) -> bool:
        return self._flight.in_flight

    async def refresh(self) -> str:
        """Return a new access token, sharing one refresh among concurrent callers."""
        return await self._flight.run(self._refresh_once)

    async def _refresh_once(self) -> str:
        started = time.monotonic()
        try:
            access_token = await self._request_new_token()
        except (ClientError, httpx.HTTPError, ValueError) as exc:
            logger.error(
                "Token refresh failed: %s",
                exc.__class__.__name__,
                extra={"error_reason": str(exc)},
            )
            self._store.clear()
            self._navigator.redirect(self._login_route)
            raise

        self._store.set_access_token(access_token)
        logger.info(
            "Access token refreshed",
            extra={"duration_ms": round((time.monotonic() - started) * 1000, 1)},
        )
        return access_token

    async def _request_new_token(self) -> str:
        refresh_token = self._store.refresh_token
        if not refresh_token:
            raise TokenRefreshError("No refresh token available")

        response = await self._http.post(
            self._refresh_path,
            json={"refreshToken": refresh_token},
            timeout=self._timeout_seconds,
        )
        try:
            body = response.json()
        except ValueError:
            body = None

        envelope = as_error_envelope(body)
        if envelope is not None:
            raise ApiResponseError(envelope, status_code=response.status_code)
        response.raise_for_status()

        payload = unwrap_optional_envelope(body)
        if not isinstance(payload, dict):
            raise TokenRefreshError("Refresh response did not include an access token")

        access_token = payload.get("accessToken") or payload.get("access_token")
        if not access_token:
            raise TokenRefreshError("Refresh response did not include an access token")

        rotated = payload.get("refreshToken") or payload.get("refresh_token")
        if rotated:
            self._store.set_refresh_token(rotated)
        return access_token
