from __future__ import annotations

from typing import Protocol

from relay_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_all(self) -> list[Message]:
        """Full history in insertion order."""
        ...


class MessageWriter(Protocol):
    async def append(self, message: Message) -> None: ...
