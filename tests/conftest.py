"""Shared test fixtures."""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import AsyncIterator

import pytest

from relay_service.application.ports.clock import FixedClock
from relay_service.domain.entities.message import Message
from relay_service.domain.entities.participant import Participant
from relay_service.domain.value_objects.enums import MessageKind
from relay_service.infrastructure.memory.message_log import InMemoryMessageLog
from relay_service.infrastructure.memory.registry import InMemoryParticipantRegistry
from relay_service.infrastructure.memory.uow import InMemoryChatState, InMemoryUoW

BROADCAST = "Todos"


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def state() -> InMemoryChatState:
    return InMemoryChatState()


@pytest.fixture
def uow(state: InMemoryChatState) -> InMemoryUoW:
    return InMemoryUoW(state)


def make_message(
    *,
    sender: str = "Alice",
    recipient: str = BROADCAST,
    text: str = "hello",
    kind: str = MessageKind.BROADCAST,
    sent_at: datetime | None = None,
) -> Message:
    return Message(
        sender=sender,
        recipient=recipient,
        text=text,
        kind=kind,
        sent_at=sent_at or FixedClock().now(),
    )


def local_hms(moment: datetime) -> str:
    return moment.astimezone().strftime("%H:%M:%S")


class StorageDown(RuntimeError):
    pass


class FlakyRegistry(InMemoryParticipantRegistry):
    """Registry whose remove() raises for the listed names."""

    def __init__(self, fail_on: set[str]) -> None:
        super().__init__()
        self.fail_on = fail_on

    async def remove(
        self, name: str, *, seen_before: datetime | None = None,
    ) -> Participant | None:
        if name in self.fail_on:
            raise StorageDown(f"cannot delete {name}")
        return await super().remove(name, seen_before=seen_before)


class BrokenMessageLog(InMemoryMessageLog):
    """Log that refuses every append."""

    async def append(self, message: Message) -> None:
        raise StorageDown("log unavailable")


@dataclass
class FakeUoW:
    """UoW over swappable stores that records commits and rollbacks."""

    participants: InMemoryParticipantRegistry = field(default_factory=InMemoryParticipantRegistry)
    messages: InMemoryMessageLog = field(default_factory=InMemoryMessageLog)
    commits: int = 0
    rollbacks: int = 0

    @property
    def participants_w(self) -> InMemoryParticipantRegistry:
        return self.participants

    @property
    def messages_w(self) -> InMemoryMessageLog:
        return self.messages

    async def ping(self) -> None:
        pass

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def factory_for(uow: object):
    @asynccontextmanager
    async def _factory() -> AsyncIterator[object]:
        yield uow

    return _factory
