"""Import all models so Base.metadata sees every table."""
from relay_service.infrastructure.db.models.message import MessageModel
from relay_service.infrastructure.db.models.participant import ParticipantModel

__all__ = [
    "MessageModel",
    "ParticipantModel",
]
