"""HTTP transport for the console API.

Wraps one ``httpx.AsyncClient`` and enforces the envelope/refresh contract:

- Request phase: attach ``Authorization: Bearer <token>`` when a token is stored.
- 2xx with an error envelope: raise ``ApiResponseError`` (the envelope's
  ``success`` flag wins over the status code).
- non-2xx: raise ``ApiResponseError`` when the body is an error envelope,
  otherwise the raw ``httpx.HTTPStatusError``.

Auth refresh state machine (per request):
- SENT -> SUCCESS | ENVELOPE_ERROR | TRANSPORT_ERROR
- AUTH.EXPIRED_TOKEN / AUTH.INVALID_TOKEN, or a plain 401 without envelope,
  on a request not yet refreshed -> REFRESHING -> RETRIED -> SUCCESS | FAIL
- the same auth failure after RETRIED propagates (no refresh loop)
- an auth failure on a request whose token was cleared in flight (a failed
  refresh or sign-out elsewhere) propagates without a second refresh
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from kms_client.auth.token_store import TokenStore
from kms_client.exceptions import ApiResponseError
from kms_client.models.envelope import TOKEN_REFRESH_CODES, as_error_envelope
from kms_client.resilience.retry import RetryContext

if TYPE_CHECKING:
    from kms_client.auth.refresher import TokenRefresher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to (re)build one outbound request."""

    method: str
    url: str
    params: dict[str, Any] | None = None
    json: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def needs_token_refresh(error: BaseException) -> bool:
    """True for errors the transport may recover from by refreshing the token."""
    if isinstance(error, ApiResponseError):
        return error.code in TOKEN_REFRESH_CODES
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code == 401
    return False


class ApiClient:
    """Envelope-aware API client with transparent token refresh.

    Parameters
    ----------
    http:
        Configured ``httpx.AsyncClient`` (base URL, default timeout).
    store:
        Token store read on every request.
    refresher:
        Performs the single-flight token refresh.
    """

    def __init__(self, http: httpx.AsyncClient, store: TokenStore, refresher: TokenRefresher) -> None:
        self._http = http
        self._store = store
        self._refresher = refresher

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send a request and return the decoded body of a successful response.

        Raises
        ------
        ApiResponseError
            If the server answered with an error envelope.
        httpx.HTTPStatusError
            If the server answered non-2xx without an envelope.
        httpx.HTTPError
            For network failures and timeouts.
        """
        spec = RequestSpec(
            method=method.upper(),
            url=url,
            params=params,
            json=json,
            headers=dict(headers or {}),
            timeout=timeout,
        )
        return await self._dispatch(spec, RetryContext())

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", url, json=json, **kwargs)

    async def put(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", url, json=json, **kwargs)

    async def patch(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", url, json=json, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", url, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _dispatch(self, spec: RequestSpec, context: RetryContext) -> Any:
        sent_token = self._store.access_token
        try:
            return await self._send(spec, sent_token, context)
        except (ApiResponseError, httpx.HTTPStatusError) as exc:
            if context.refreshed or not needs_token_refresh(exc):
                raise

            current = self._store.access_token
            if sent_token is not None and current is None:
                # The session ended while this request was in flight
                logger.info("Session ended during %s %s, not refreshing", spec.method, spec.url)
                raise
            if current is not None and current != sent_token:
                # Another request refreshed while this one was in flight
                logger.info("Replaying %s %s with the current access token", spec.method, spec.url)
            else:
                logger.warning(
                    "Auth failure on %s %s, refreshing access token",
                    spec.method,
                    spec.url,
                    extra={"error_code": getattr(exc, "code", "HTTP_401")},
                )
                await self._refresher.refresh()

            return await self._dispatch(spec, context.after_refresh())

    async def _send(self, spec: RequestSpec, token: str | None, context: RetryContext) -> Any:
        headers = dict(spec.headers)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        request = self._http.build_request(
            spec.method,
            spec.url,
            params=spec.params,
            json=spec.json,
            headers=headers,
            timeout=spec.timeout if spec.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

        started = time.monotonic()
        response = await self._http.send(request)
        duration_ms = round((time.monotonic() - started) * 1000, 1)
        body = _decode(response)

        logger.debug(
            "%s %s -> %d in %.1fms",
            spec.method,
            spec.url,
            response.status_code,
            duration_ms,
            extra={
                "method": spec.method,
                "url": spec.url,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "attempt": 2 if context.refreshed else 1,
            },
        )

        envelope = as_error_envelope(body)
        if envelope is not None:
            raise ApiResponseError(envelope, status_code=response.status_code)

        response.raise_for_status()
        return body
