from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header, Query

from relay_service.api.deps import ClockDep, UoWDep
from relay_service.api.v1.schemas.message import MessageResponse, PostMessageRequest
from relay_service.application.dto.message import PostMessageDTO
from relay_service.services import message_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def read_messages(
    uow: UoWDep,
    user: Annotated[str | None, Header()] = None,
    limit: str | None = Query(None),
) -> list[MessageResponse]:
    messages = await message_service.read_messages(user, limit, uow)
    return [MessageResponse.from_entity(m) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def post_message(
    body: PostMessageRequest,
    user: Annotated[str, Header()],
    uow: UoWDep,
    clock: ClockDep,
) -> MessageResponse:
    dto = PostMessageDTO(
        sender=user,
        recipient=body.to,
        text=body.text,
        kind=body.type,
    )
    msg = await message_service.post_message(dto, uow, clock)
    return MessageResponse.from_entity(msg)
