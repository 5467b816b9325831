"""Auth state: storage, token store, refresh flow and login redirect."""

from kms_client.auth.navigation import LoggingNavigator, Navigator
from kms_client.auth.refresher import TokenRefresher
from kms_client.auth.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from kms_client.auth.token_store import TokenStore

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "LoggingNavigator",
    "MemoryStorage",
    "Navigator",
    "TokenRefresher",
    "TokenStore",
]
