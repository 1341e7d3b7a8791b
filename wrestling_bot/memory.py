# /wrestling_bot/memory.py
from sqlalchemy.orm import Session

from .store import upsert_facts

# ===== Trigger words =====
_MATCH_WORD = "match"
_NOTABLE_WORDS = ["slam", "cyclone", "roar", "injur", "pain", "nsfw", "sex", "fuck", "kiss", "touch"]

NOTE_DELIMITER = " | "


def compute_updated_facts(existing: str, message: str) -> str:
    """
    Append a note per trigger category the message hits.
    Notes quote the original message text; nothing is deduplicated or trimmed.
    """
    updated = existing or ""
    m_lower = (message or "").lower()

    if _MATCH_WORD in m_lower:
        updated += f"{NOTE_DELIMITER}New match discussed: {message}"
    if any(w in m_lower for w in _NOTABLE_WORDS):
        updated += f"{NOTE_DELIMITER}Notable event: {message}"

    return updated


def update_memory(db: Session, user_id: str, existing: str, message: str) -> bool:
    """
    Persist the updated facts only if a trigger fired. Returns True on write.
    """
    updated = compute_updated_facts(existing, message)
    if updated == (existing or ""):
        return False

    upsert_facts(db, user_id, updated)
    return True
