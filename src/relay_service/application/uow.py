from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from relay_service.application.repositories.message import MessageReader, MessageWriter
from relay_service.application.repositories.participant import (
    ParticipantReader,
    ParticipantWriter,
)


class UnitOfWork(Protocol):
    participants: ParticipantReader
    participants_w: ParticipantWriter
    messages: MessageReader
    messages_w: MessageWriter

    async def ping(self) -> None: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]
