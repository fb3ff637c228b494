from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header

from relay_service.api.deps import ClockDep, UoWDep
from relay_service.services import participant_service

router = APIRouter(tags=["presence"])


@router.post("/status")
async def heartbeat(
    user: Annotated[str, Header()],
    uow: UoWDep,
    clock: ClockDep,
) -> dict[str, str]:
    await participant_service.heartbeat(user, uow, clock)
    return {"status": "ok"}
