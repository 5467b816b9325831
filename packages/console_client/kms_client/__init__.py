"""Resilient API client layer of the knowledge-management console."""

from kms_client.exceptions import (
    ApiResponseError,
    ClientError,
    EnvelopeFormatError,
    TokenRefreshError,
)
from kms_client.main import Console, create_console

__all__ = [
    "ApiResponseError",
    "ClientError",
    "Console",
    "EnvelopeFormatError",
    "TokenRefreshError",
    "create_console",
]
