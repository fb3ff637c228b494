from __future__ import annotations

from relay_service.domain.entities.message import Message
from relay_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        sender=model.sender,
        recipient=model.recipient,
        text=model.text,
        kind=model.kind,
        sent_at=model.sent_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        sender=entity.sender,
        recipient=entity.recipient,
        text=entity.text,
        kind=str(entity.kind),
        sent_at=entity.sent_at,
    )
