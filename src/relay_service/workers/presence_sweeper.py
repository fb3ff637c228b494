"""Presence sweeper: evicts participants whose heartbeat has gone quiet."""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from relay_service.application.ports.clock import Clock
from relay_service.application.uow import UoWFactory
from relay_service.domain.events.presence import left_notice
from relay_service.services import message_service, participant_service

logger = logging.getLogger(__name__)


class PresenceSweeper:
    """Periodically removes stale participants and posts a leave notice for each.

    Staleness is only checked on sweep boundaries, so a participant is removed
    somewhere between `timeout` and `timeout + interval` after its last
    heartbeat.
    """

    def __init__(
        self,
        uow_factory: UoWFactory,
        clock: Clock,
        broadcast_target: str,
        *,
        interval: float = 15.0,
        timeout: float = 10.0,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._broadcast_target = broadcast_target
        self._interval = interval
        self._timeout = timeout
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="presence-sweeper")
        logger.info(
            "Presence sweeper started (interval=%.1fs, timeout=%.1fs)",
            self._interval,
            self._timeout,
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Presence sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Presence sweep failed")

    async def sweep_once(self) -> list[str]:
        """Run one eviction pass and return the names that were evicted.

        The first failure ends the pass; stale participants after it are
        left for the next sweep.
        """
        async with self._uow_factory() as uow:
            now = self._clock.now()
            cutoff = now - timedelta(seconds=self._timeout)
            snapshot = await uow.participants.list_active()
            stale = [p for p in snapshot if p.last_seen_at < cutoff]
            if not stale:
                return []

            evicted: list[str] = []
            for participant in stale:
                try:
                    removed = await participant_service.evict(
                        participant.name, uow, seen_before=cutoff,
                    )
                    if removed is None:
                        logger.warning(
                            "Participant %s was already gone or came back, "
                            "deferring %d stale participant(s) to next sweep",
                            participant.name,
                            len(stale) - len(evicted) - 1,
                        )
                        break
                    evicted.append(participant.name)

                    await message_service.append_event(
                        left_notice(participant.name, self._broadcast_target, self._clock.now()),
                        uow,
                    )
                except Exception:
                    logger.exception(
                        "Failed to evict %s, stopping this sweep", participant.name,
                    )
                    await uow.rollback()
                    break

            if evicted:
                logger.info("Evicted %d stale participant(s): %s", len(evicted), ", ".join(evicted))
            return evicted
