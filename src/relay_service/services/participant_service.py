from __future__ import annotations

import logging
from datetime import datetime

from relay_service.application.exceptions import DuplicateNameError, UnknownParticipantError
from relay_service.application.policies.validation import normalize_name
from relay_service.application.ports.clock import Clock
from relay_service.application.uow import UnitOfWork
from relay_service.domain.entities.participant import Participant
from relay_service.domain.events.presence import joined_notice
from relay_service.services import message_service

logger = logging.getLogger(__name__)


async def register(
    name: str,
    broadcast_target: str,
    uow: UnitOfWork,
    clock: Clock,
) -> Participant:
    """Add a participant and announce it to the room.

    The join notice is written after the registration is committed; if it
    cannot be stored the participant stays registered.
    """
    name = normalize_name(name)
    participant = Participant(name=name, last_seen_at=clock.now())

    added = await uow.participants_w.add_if_absent(participant)
    if not added:
        raise DuplicateNameError(f"Participant {name!r} is already registered")
    await uow.commit()
    logger.info("Participant %s registered", name)

    try:
        await message_service.append_event(
            joined_notice(name, broadcast_target, clock.now()), uow,
        )
    except Exception:
        logger.exception("Could not record join notice for %s", name)
        await uow.rollback()

    return participant


async def heartbeat(name: str, uow: UnitOfWork, clock: Clock) -> None:
    refreshed = await uow.participants_w.touch(name, clock.now())
    if not refreshed:
        raise UnknownParticipantError(f"Participant {name!r} is not registered")
    await uow.commit()


async def list_active(uow: UnitOfWork) -> list[Participant]:
    return await uow.participants.list_active()


async def evict(
    name: str,
    uow: UnitOfWork,
    *,
    seen_before: datetime | None = None,
) -> Participant | None:
    """Remove a participant. Returns None if there was nothing to remove."""
    removed = await uow.participants_w.remove(name, seen_before=seen_before)
    if removed is not None:
        await uow.commit()
    return removed
