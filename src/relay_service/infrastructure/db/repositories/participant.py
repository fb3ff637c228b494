from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from relay_service.domain.entities.participant import Participant
from relay_service.infrastructure.db.mappers import participant as mapper
from relay_service.infrastructure.db.models.participant import ParticipantModel


class ParticipantReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, name: str) -> Participant | None:
        stmt = select(ParticipantModel).where(ParticipantModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_active(self) -> list[Participant]:
        stmt = select(ParticipantModel).order_by(ParticipantModel.id.asc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ParticipantWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_if_absent(self, participant: Participant) -> bool:
        stmt = (
            pg_insert(ParticipantModel)
            .values(**mapper.entity_to_values(participant))
            .on_conflict_do_nothing(index_elements=[ParticipantModel.name])
            .returning(ParticipantModel.id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def touch(self, name: str, ts: datetime) -> bool:
        stmt = (
            update(ParticipantModel)
            .where(ParticipantModel.name == name)
            .values(last_seen_at=ts)
            .returning(ParticipantModel.id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def remove(
        self, name: str, *, seen_before: datetime | None = None,
    ) -> Participant | None:
        stmt = delete(ParticipantModel).where(ParticipantModel.name == name)
        if seen_before is not None:
            stmt = stmt.where(ParticipantModel.last_seen_at < seen_before)
        stmt = stmt.returning(ParticipantModel.name, ParticipantModel.last_seen_at)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return Participant(name=row.name, last_seen_at=row.last_seen_at)
