"""Status notices synthesized when a participant enters or leaves the room."""
from __future__ import annotations

from datetime import datetime

from relay_service.domain.entities.message import Message
from relay_service.domain.value_objects.enums import MessageKind

JOINED_TEXT = "joined the room..."
LEFT_TEXT = "left the room..."


def joined_notice(name: str, broadcast_target: str, at: datetime) -> Message:
    return Message(
        sender=name,
        recipient=broadcast_target,
        text=JOINED_TEXT,
        kind=MessageKind.STATUS,
        sent_at=at,
    )


def left_notice(name: str, broadcast_target: str, at: datetime) -> Message:
    return Message(
        sender=name,
        recipient=broadcast_target,
        text=LEFT_TEXT,
        kind=MessageKind.STATUS,
        sent_at=at,
    )
