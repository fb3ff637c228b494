from __future__ import annotations

from enum import StrEnum


class MessageKind(StrEnum):
    BROADCAST = "broadcast"
    DIRECT = "direct"
    STATUS = "status"


PUBLIC_KINDS = frozenset({MessageKind.BROADCAST, MessageKind.STATUS})
