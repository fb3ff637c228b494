"""Which messages a viewer may see, and how much of them per poll."""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from relay_service.domain.entities.message import Message
from relay_service.domain.value_objects.enums import PUBLIC_KINDS

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")
# Longer runs are larger than any log and mean "everything".
_MAX_LIMIT_DIGITS = 18


def is_visible(message: Message, viewer: str | None) -> bool:
    if message.kind in PUBLIC_KINDS:
        return True
    if viewer is None:
        return False
    return viewer in (message.sender, message.recipient)


def visible(messages: Iterable[Message], viewer: str | None) -> list[Message]:
    """Filter the log for viewer, keeping log order."""
    return [m for m in messages if is_visible(m, viewer)]


def parse_limit(raw: str | int | None) -> int | None:
    """Read a client-supplied limit.

    Only a leading integer is considered ("20abc" -> 20). Anything that does
    not yield a positive number means "no limit".
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(raw)
        if match is None:
            return None
        sign, digits = match.groups()
        if len(digits) > _MAX_LIMIT_DIGITS:
            return None
        value = int(sign + digits)
    return value if value > 0 else None


def take_last(messages: Sequence[Message], limit: int | None) -> list[Message]:
    if limit is None:
        return list(messages)
    return list(messages[-limit:])
