"""Process-local append-only message log."""
from __future__ import annotations

import asyncio

from relay_service.domain.entities.message import Message


class InMemoryMessageLog:
    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._lock = asyncio.Lock()

    async def append(self, message: Message) -> None:
        async with self._lock:
            self._messages.append(message)

    async def list_all(self) -> list[Message]:
        async with self._lock:
            return list(self._messages)
