from __future__ import annotations

from relay_service.domain.entities.participant import Participant
from relay_service.infrastructure.db.models.participant import ParticipantModel


def model_to_entity(model: ParticipantModel) -> Participant:
    return Participant(name=model.name, last_seen_at=model.last_seen_at)


def entity_to_values(entity: Participant) -> dict[str, object]:
    return {"name": entity.name, "last_seen_at": entity.last_seen_at}
