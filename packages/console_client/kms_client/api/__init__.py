"""Endpoint wrappers."""

from kms_client.api.auth import AuthApi, Session
from kms_client.api.manuals import ManualsApi

__all__ = ["AuthApi", "ManualsApi", "Session"]
