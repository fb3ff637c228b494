from __future__ import annotations

from fastapi import APIRouter

from relay_service.api.deps import ClockDep, SettingsDep, UoWDep
from relay_service.api.v1.schemas.participant import (
    ParticipantResponse,
    RegisterParticipantRequest,
)
from relay_service.services import participant_service

router = APIRouter(prefix="/participants", tags=["participants"])


@router.get("", response_model=list[ParticipantResponse])
async def list_participants(uow: UoWDep) -> list[ParticipantResponse]:
    participants = await participant_service.list_active(uow)
    return [ParticipantResponse.model_validate(p, from_attributes=True) for p in participants]


@router.post("", response_model=ParticipantResponse, status_code=201)
async def register_participant(
    body: RegisterParticipantRequest,
    uow: UoWDep,
    clock: ClockDep,
    cfg: SettingsDep,
) -> ParticipantResponse:
    participant = await participant_service.register(
        body.name, cfg.BROADCAST_TARGET, uow, clock,
    )
    return ParticipantResponse.model_validate(participant, from_attributes=True)
