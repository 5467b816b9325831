"""Manual draft payloads."""

from __future__ import annotations

from pydantic import BaseModel


class ManualDraftCreatePayload(BaseModel):
    """Request body for generating a manual draft from a consultation."""

    consultation_id: str
    enforce_hallucination_check: bool | None = None  # server default is True
