# /wrestling_bot/models.py
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Text

from .db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationTurn(Base):
    """
    Append-only chat log. Rows are never edited or deleted.
    `id` breaks ties between turns stored within the same clock tick.
    """
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    message = Column(Text, nullable=False)
    role = Column(String, nullable=False)  # user | assistant
    timestamp = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        CheckConstraint("role IN ('user','assistant')", name="ck_conversations_role"),
    )


class UserMemory(Base):
    __tablename__ = "memory"

    user_id = Column(String, primary_key=True)
    character_facts = Column(Text, nullable=False, default="")


Index("ix_conversations_user_id_timestamp", ConversationTurn.user_id, ConversationTurn.timestamp.desc())
