from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from relay_service.domain.entities.message import Message
from relay_service.infrastructure.db.mappers import message as mapper
from relay_service.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Message]:
        stmt = select(MessageModel).order_by(MessageModel.id.asc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, message: Message) -> None:
        self._session.add(mapper.entity_to_model(message))
        await self._session.flush()
