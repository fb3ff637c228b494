from __future__ import annotations

import asyncio

import pytest

from relay_service.domain.events.presence import LEFT_TEXT
from relay_service.domain.value_objects.enums import MessageKind
from relay_service.infrastructure.memory.registry import InMemoryParticipantRegistry
from relay_service.services import participant_service
from relay_service.workers.presence_sweeper import PresenceSweeper
from tests.conftest import (
    BROADCAST,
    BrokenMessageLog,
    FakeUoW,
    FlakyRegistry,
    factory_for,
)


def make_sweeper(uow, clock, **kwargs) -> PresenceSweeper:
    return PresenceSweeper(factory_for(uow), clock, BROADCAST, **kwargs)


@pytest.mark.asyncio
async def test_sweep_evicts_silent_participant(uow, clock):
    await participant_service.register("Dave", BROADCAST, uow, clock)
    clock.advance(11)

    evicted = await make_sweeper(uow, clock).sweep_once()

    assert evicted == ["Dave"]
    assert await uow.participants.list_active() == []
    last = (await uow.messages.list_all())[-1]
    assert last.kind == MessageKind.STATUS
    assert last.sender == "Dave"
    assert last.recipient == BROADCAST
    assert last.text == LEFT_TEXT
    assert last.sent_at == clock.now()


@pytest.mark.asyncio
async def test_sweep_appends_exactly_one_leave_notice_per_eviction(uow, clock):
    for name in ("Alice", "Bob", "Carol"):
        await participant_service.register(name, BROADCAST, uow, clock)
    clock.advance(30)
    sweeper = make_sweeper(uow, clock)

    await sweeper.sweep_once()
    await sweeper.sweep_once()

    leaves = [m for m in await uow.messages.list_all() if m.text == LEFT_TEXT]
    assert [m.sender for m in leaves] == ["Alice", "Bob", "Carol"]


@pytest.mark.asyncio
async def test_sweep_keeps_participants_within_timeout(uow, clock):
    await participant_service.register("Alice", BROADCAST, uow, clock)
    clock.advance(10)

    evicted = await make_sweeper(uow, clock).sweep_once()

    assert evicted == []
    assert [p.name for p in await uow.participants.list_active()] == ["Alice"]


@pytest.mark.asyncio
async def test_heartbeat_keeps_participant_alive(uow, clock):
    await participant_service.register("Alice", BROADCAST, uow, clock)
    await participant_service.register("Bob", BROADCAST, uow, clock)
    clock.advance(8)
    await participant_service.heartbeat("Alice", uow, clock)
    clock.advance(8)

    evicted = await make_sweeper(uow, clock).sweep_once()

    assert evicted == ["Bob"]
    assert [p.name for p in await uow.participants.list_active()] == ["Alice"]


@pytest.mark.asyncio
async def test_custom_timeout(uow, clock):
    await participant_service.register("Alice", BROADCAST, uow, clock)
    clock.advance(4)

    evicted = await make_sweeper(uow, clock, timeout=3).sweep_once()

    assert evicted == ["Alice"]


@pytest.mark.asyncio
async def test_eviction_failure_stops_the_batch(clock):
    uow = FakeUoW(participants=FlakyRegistry(fail_on={"Bob"}))
    for name in ("Alice", "Bob", "Carol"):
        await participant_service.register(name, BROADCAST, uow, clock)
    clock.advance(11)
    sweeper = make_sweeper(uow, clock)

    evicted = await sweeper.sweep_once()

    assert evicted == ["Alice"]
    assert [p.name for p in await uow.participants.list_active()] == ["Bob", "Carol"]
    assert uow.rollbacks == 1

    uow.participants.fail_on.clear()
    assert await sweeper.sweep_once() == ["Bob", "Carol"]


@pytest.mark.asyncio
async def test_leave_notice_failure_stops_the_batch(clock):
    uow = FakeUoW()
    for name in ("Alice", "Bob"):
        await participant_service.register(name, BROADCAST, uow, clock)
    uow.messages = BrokenMessageLog()
    clock.advance(11)

    evicted = await make_sweeper(uow, clock).sweep_once()

    # The first removal already took effect; only its notice is lost.
    assert evicted == ["Alice"]
    assert [p.name for p in await uow.participants.list_active()] == ["Bob"]


class RacingRegistry(InMemoryParticipantRegistry):
    """Registry where Alice disappears right after the sweeper's snapshot."""

    async def list_active(self):
        snapshot = await super().list_active()
        await self.remove("Alice")
        return snapshot


@pytest.mark.asyncio
async def test_participant_gone_before_eviction_stops_the_batch(clock):
    uow = FakeUoW(participants=RacingRegistry())
    for name in ("Alice", "Bob"):
        await participant_service.register(name, BROADCAST, uow, clock)
    clock.advance(11)

    evicted = await make_sweeper(uow, clock).sweep_once()

    assert evicted == []
    assert [p.name for p in uow.participants._entries.values()] == ["Bob"]
    assert not any(m.text == LEFT_TEXT for m in await uow.messages.list_all())


@pytest.mark.asyncio
async def test_sweep_with_empty_registry(uow, clock):
    assert await make_sweeper(uow, clock).sweep_once() == []
    assert await uow.messages.list_all() == []


@pytest.mark.asyncio
async def test_start_and_stop(uow, clock):
    await participant_service.register("Dave", BROADCAST, uow, clock)
    clock.advance(60)
    sweeper = make_sweeper(uow, clock, interval=0.01)

    await sweeper.start()
    assert sweeper.running
    for _ in range(100):
        if not await uow.participants.list_active():
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert not sweeper.running
    assert await uow.participants.list_active() == []


@pytest.mark.asyncio
async def test_loop_survives_failing_sweep(clock):
    calls = 0

    def broken_factory():
        nonlocal calls
        calls += 1
        raise RuntimeError("no storage")

    sweeper = PresenceSweeper(broken_factory, clock, BROADCAST, interval=0.01)

    await sweeper.start()
    for _ in range(100):
        if calls >= 2:
            break
        await asyncio.sleep(0.01)
    assert sweeper.running
    await sweeper.stop()

    assert calls >= 2
