from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RegisterParticipantRequest(BaseModel):
    name: str | None = None


class ParticipantResponse(BaseModel):
    name: str
    last_seen_at: datetime

    model_config = {"from_attributes": True}
