from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PostMessageDTO:
    sender: str
    recipient: str
    text: str
    kind: str
