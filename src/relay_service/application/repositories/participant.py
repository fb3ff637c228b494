from __future__ import annotations

from datetime import datetime
from typing import Protocol

from relay_service.domain.entities.participant import Participant


class ParticipantReader(Protocol):
    async def get(self, name: str) -> Participant | None: ...

    async def list_active(self) -> list[Participant]:
        """Snapshot of registered participants in registration order."""
        ...


class ParticipantWriter(Protocol):
    async def add_if_absent(self, participant: Participant) -> bool:
        """Insert participant. Return False (and change nothing) if the name is taken."""
        ...

    async def touch(self, name: str, ts: datetime) -> bool:
        """Set last_seen_at. Return False if the name is not registered."""
        ...

    async def remove(
        self, name: str, *, seen_before: datetime | None = None,
    ) -> Participant | None:
        """Delete and return the entry, or None if it is absent.

        With seen_before, an entry whose last_seen_at is not older than the
        cutoff is left in place and None is returned.
        """
        ...
