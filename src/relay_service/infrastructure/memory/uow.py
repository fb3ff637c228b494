from __future__ import annotations

from types import TracebackType
from typing import Self

from relay_service.infrastructure.memory.message_log import InMemoryMessageLog
from relay_service.infrastructure.memory.registry import InMemoryParticipantRegistry


class InMemoryChatState:
    """Registry and log shared by every request handler and the sweeper."""

    def __init__(self) -> None:
        self.registry = InMemoryParticipantRegistry()
        self.log = InMemoryMessageLog()


class InMemoryUoW:
    """Unit-of-Work over InMemoryChatState.

    Each repository call is applied immediately, so commit and rollback
    have nothing to do.
    """

    def __init__(self, state: InMemoryChatState) -> None:
        self.participants = state.registry
        self.participants_w = state.registry
        self.messages = state.log
        self.messages_w = state.log

    async def ping(self) -> None:
        pass

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
