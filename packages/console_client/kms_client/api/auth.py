"""Auth endpoints and the session that owns the token lifecycle.

Login and ``me`` may answer with or without an envelope; ``Session`` accepts
both. Only ``Session.start`` / ``Session.end`` and the refresh flow write the
token store.
"""

from __future__ import annotations

import logging
from typing import Any

from kms_client.auth.token_store import TokenStore
from kms_client.models.auth import (
    ApiUser,
    AuthTokenSet,
    AuthUser,
    LoginPayload,
    SignupPayload,
    TokenResponse,
)
from kms_client.transport.client import ApiClient
from kms_client.transport.response_handler import unwrap_optional_envelope

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/v1/auth/login"
SIGNUP_PATH = "/api/v1/auth/signup"
ME_PATH = "/api/v1/auth/me"


class AuthApi:
    """Thin endpoint wrappers returning the decoded response body."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, payload: LoginPayload) -> Any:
        return await self._client.post(LOGIN_PATH, json=payload.model_dump())

    async def signup(self, payload: SignupPayload) -> Any:
        return await self._client.post(SIGNUP_PATH, json=payload.model_dump(exclude_none=True))

    async def me(self) -> Any:
        return await self._client.get(ME_PATH)


class Session:
    def __init__(self, store: TokenStore, auth_api: AuthApi) -> None:
        self._store = store
        self._auth_api = auth_api

    @property
    def current_user(self) -> AuthUser | None:
        return self._store.user

    @property
    def is_authenticated(self) -> bool:
        return self._store.is_authenticated

    def start(self, tokens: TokenResponse, user: AuthUser | None = None) -> None:
        self._store.save(
            AuthTokenSet(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                user=user,
            )
        )

    def end(self) -> None:
        self._store.clear()

    async def sign_in(self, username: str, password: str) -> AuthUser:
        """Log in, persist the tokens and cache the signed-in user.

        Raises:
            ApiResponseError: Bad credentials or any other envelope error;
                nothing is stored in that case.
        """
        body = await self._auth_api.login(LoginPayload(username=username, password=password))
        tokens = TokenResponse.model_validate(unwrap_optional_envelope(body))
        self.start(tokens)

        try:
            profile = ApiUser.model_validate(unwrap_optional_envelope(await self._auth_api.me()))
        except Exception:
            # No stored token without a cached user
            self.end()
            raise

        user = profile.to_auth_user()
        self._store.set_user(user)
        logger.info("Signed in as %s", user.employee_id)
        return user
