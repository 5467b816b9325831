"""Token store: access/refresh tokens and the cached signed-in user.

SECURITY: Token values are never logged.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from kms_client.auth.storage import KeyValueStorage, MemoryStorage
from kms_client.models.auth import AuthTokenSet, AuthUser

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
LEGACY_ACCESS_TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user_info"

ALL_KEYS = (ACCESS_TOKEN_KEY, LEGACY_ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY)


class TokenStore:
    """Pure storage for auth state with explicit set/clear.

    Written only by login, refresh and logout; read by every request.
    """

    def __init__(self, storage: KeyValueStorage | None = None) -> None:
        self._storage = storage if storage is not None else MemoryStorage()

    @property
    def access_token(self) -> str | None:
        return self._storage.get(ACCESS_TOKEN_KEY) or self._storage.get(LEGACY_ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> str | None:
        return self._storage.get(REFRESH_TOKEN_KEY)

    @property
    def user(self) -> AuthUser | None:
        raw = self._storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return AuthUser.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Failed to parse %s from storage: %s", USER_KEY, exc.error_count())
            return None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def set_access_token(self, token: str) -> None:
        self._storage.set(ACCESS_TOKEN_KEY, token)
        self._storage.set(LEGACY_ACCESS_TOKEN_KEY, token)

    def set_refresh_token(self, token: str) -> None:
        self._storage.set(REFRESH_TOKEN_KEY, token)

    def set_user(self, user: AuthUser) -> None:
        self._storage.set(USER_KEY, user.model_dump_json())

    def save(self, tokens: AuthTokenSet) -> None:
        self.set_access_token(tokens.access_token)
        if tokens.refresh_token:
            self.set_refresh_token(tokens.refresh_token)
        if tokens.user is not None:
            self.set_user(tokens.user)

    def snapshot(self) -> AuthTokenSet | None:
        access = self.access_token
        if access is None:
            return None
        return AuthTokenSet(access_token=access, refresh_token=self.refresh_token, user=self.user)

    def clear(self) -> None:
        """Remove every auth key in one storage write."""
        self._storage.remove_many(ALL_KEYS)
        logger.info("Cleared stored auth tokens")
