from __future__ import annotations

from relay_service.application.dto.message import PostMessageDTO
from relay_service.application.exceptions import UnknownSenderError
from relay_service.application.policies.validation import validate_message
from relay_service.application.policies.visibility import parse_limit, take_last, visible
from relay_service.application.ports.clock import Clock
from relay_service.application.uow import UnitOfWork
from relay_service.domain.entities.message import Message


async def append_event(message: Message, uow: UnitOfWork) -> Message:
    """Validate and append a message to the log."""
    validate_message(message)
    await uow.messages_w.append(message)
    await uow.commit()
    return message


async def post_message(
    dto: PostMessageDTO,
    uow: UnitOfWork,
    clock: Clock,
) -> Message:
    msg = Message(
        sender=dto.sender,
        recipient=dto.recipient,
        text=dto.text,
        kind=dto.kind,
        sent_at=clock.now(),
    )
    validate_message(msg)

    if await uow.participants.get(msg.sender) is None:
        raise UnknownSenderError(f"Sender {msg.sender!r} is not a participant")

    return await append_event(msg, uow)


async def read_messages(
    viewer: str | None,
    limit: str | int | None,
    uow: UnitOfWork,
) -> list[Message]:
    """Messages visible to viewer, optionally only the last `limit` of them."""
    history = await uow.messages.list_all()
    return take_last(visible(history, viewer), parse_limit(limit))
