from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    sender: str
    recipient: str
    text: str
    kind: str
    sent_at: datetime

    @property
    def display_time(self) -> str:
        """Wall-clock time of the server, as shown next to each chat line."""
        return self.sent_at.astimezone().strftime("%H:%M:%S")
