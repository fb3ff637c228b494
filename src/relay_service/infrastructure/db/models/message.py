from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from relay_service.infrastructure.db.base import Base


class MessageModel(Base):
    __tablename__ = "messages"

    # Insertion order is the timeline; sent_at alone is not unique.
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    sender: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    __table_args__ = (
        Index("ix_messages_kind_parties", "kind", "sender", "recipient"),
    )
