"""Manual endpoints.

Draft generation runs an AI model on the server and may take well over the
default request timeout, so it is sent with the long timeout from settings.
"""

from __future__ import annotations

from typing import Any

from kms_client.models.manuals import ManualDraftCreatePayload
from kms_client.transport.client import ApiClient

DRAFT_PATH = "/api/v1/manuals/draft"


class ManualsApi:
    def __init__(self, client: ApiClient, draft_timeout_seconds: float = 120.0) -> None:
        self._client = client
        self._draft_timeout_seconds = draft_timeout_seconds

    async def create_draft(self, payload: ManualDraftCreatePayload) -> Any:
        return await self._client.post(
            DRAFT_PATH,
            json=payload.model_dump(exclude_none=True),
            timeout=self._draft_timeout_seconds,
        )
