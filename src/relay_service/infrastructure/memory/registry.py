"""Process-local participant registry."""
from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime

from relay_service.domain.entities.participant import Participant


class InMemoryParticipantRegistry:
    """Participants keyed by name; dict order is registration order."""

    def __init__(self) -> None:
        self._entries: dict[str, Participant] = {}
        self._lock = asyncio.Lock()

    async def get(self, name: str) -> Participant | None:
        return self._entries.get(name)

    async def list_active(self) -> list[Participant]:
        async with self._lock:
            return list(self._entries.values())

    async def add_if_absent(self, participant: Participant) -> bool:
        async with self._lock:
            if participant.name in self._entries:
                return False
            self._entries[participant.name] = participant
            return True

    async def touch(self, name: str, ts: datetime) -> bool:
        async with self._lock:
            current = self._entries.get(name)
            if current is None:
                return False
            self._entries[name] = replace(current, last_seen_at=ts)
            return True

    async def remove(
        self, name: str, *, seen_before: datetime | None = None,
    ) -> Participant | None:
        async with self._lock:
            current = self._entries.get(name)
            if current is None:
                return None
            if seen_before is not None and current.last_seen_at >= seen_before:
                return None
            return self._entries.pop(name)
