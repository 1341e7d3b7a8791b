# /wrestling_bot/store.py
"""
Keyed access to the two tables. No business logic lives here.
Each helper commits its own single statement; callers that read then write
(get_facts -> upsert_facts) are not transactional.
"""
from typing import Dict, List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from .models import ConversationTurn, UserMemory

ROLES = {"user", "assistant"}


def append_turn(db: Session, user_id: str, message: str, role: str) -> None:
    if role not in ROLES:
        raise ValueError("role must be user|assistant")

    db.add(ConversationTurn(user_id=user_id, message=message, role=role))
    db.commit()


def recent_turns(db: Session, user_id: str, limit: int = 5) -> List[Dict[str, str]]:
    """
    Up to `limit` most recent turns, oldest first, as {role, content}.
    """
    if limit <= 0:
        return []

    rows = (
        db.query(ConversationTurn)
        .filter(ConversationTurn.user_id == user_id)
        .order_by(desc(ConversationTurn.timestamp), desc(ConversationTurn.id))
        .limit(limit)
        .all()
    )
    rows = list(reversed(rows))
    return [{"role": r.role, "content": r.message} for r in rows]


def get_facts(db: Session, user_id: str) -> str:
    row = db.get(UserMemory, user_id)
    return row.character_facts if row and row.character_facts else ""


def upsert_facts(db: Session, user_id: str, facts: str) -> None:
    """
    Read-or-create, then overwrite with the complete new value.
    Two requests for the same user can interleave here and lose an update.
    """
    row = db.get(UserMemory, user_id)
    if row is None:
        db.add(UserMemory(user_id=user_id, character_facts=facts))
    else:
        row.character_facts = facts
    db.commit()
