"""Client error hierarchy.

All client-specific errors extend ClientError. Raw ``httpx`` errors are not
wrapped; they propagate unchanged and are normalised by
``kms_client.diagnostics.classify``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kms_client.models.envelope import ApiErrorResponse, ApiFeedback


class ClientError(Exception):
    """Base error for all console client errors."""

    message: str = "Client error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.__class__.message
        super().__init__(self.message)


class EnvelopeFormatError(ClientError, ValueError):
    """A decoded body does not have the success/error envelope shape."""

    message = "Response body is not an API envelope"


class TokenRefreshError(ClientError):
    """The refresh endpoint could not produce a new access token."""

    message = "Token refresh failed"


class ApiResponseError(ClientError):
    """A failed envelope carried out of the transport layer.

    Attributes mirror the envelope: ``code``, ``message``, ``details`` and
    ``hint`` come from its error block, ``request_id`` and ``timestamp`` from
    its meta, and ``feedback`` is the envelope's feedback list.
    """

    def __init__(self, envelope: ApiErrorResponse, status_code: int | None = None) -> None:
        error = envelope.error
        self.envelope = envelope
        self.code: str = error.code
        self.details: dict[str, Any] | None = error.details
        self.hint: str | None = error.hint
        self.request_id: str = envelope.meta.request_id
        self.timestamp: str = envelope.meta.timestamp
        self.feedback: list[ApiFeedback] = list(envelope.feedback)
        self.status_code = status_code
        super().__init__(error.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
