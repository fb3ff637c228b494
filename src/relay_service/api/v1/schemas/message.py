from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from relay_service.domain.entities.message import Message


class PostMessageRequest(BaseModel):
    # Checked by validate_message so every bad field is reported together.
    to: str | None = None
    text: str | None = None
    type: str | None = None


class MessageResponse(BaseModel):
    sender: str = Field(alias="from")
    to: str
    text: str
    type: str
    time: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, message: Message) -> MessageResponse:
        return cls(
            sender=message.sender,
            to=message.recipient,
            text=message.text,
            type=str(message.kind),
            time=message.display_time,
        )
