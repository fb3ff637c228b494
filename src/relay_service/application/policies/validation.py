from __future__ import annotations

from relay_service.application.exceptions import InvalidNameError, MessageValidationError
from relay_service.domain.entities.message import Message
from relay_service.domain.value_objects.enums import MessageKind

_KINDS = frozenset(MessageKind)


def normalize_name(raw: str | None) -> str:
    """Return the stripped display name, rejecting missing or blank ones."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidNameError("name must be a non-empty string")
    return raw.strip()


def validate_message(message: Message) -> None:
    errors: list[str] = []
    for field_name in ("sender", "recipient", "text"):
        value = getattr(message, field_name)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{field_name} is required")
    if message.kind not in _KINDS:
        allowed = ", ".join(k.value for k in MessageKind)
        errors.append(f"kind must be one of: {allowed}")
    if errors:
        raise MessageValidationError(errors)
