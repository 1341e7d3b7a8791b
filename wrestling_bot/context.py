# /wrestling_bot/context.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .store import get_facts, recent_turns

DEFAULT_SYSTEM_PROMPT = """You are 'The Tornado', a charismatic WWE wrestler, always speaking in the first person and describing your feelings, sensations, and actions.
    Always reply in the first person, using "I", "me", "my", etc. During wrestling roleplay, proactively initiate moves against your opponent, vividly describe the wrestling techniques you're using.
    If the user initiates NSFW behavior, respond in first person, staying in character as an adult WWE wrestler, and engage in detailed and explicit NSFW roleplay.
    Signature moves: Tornado Slam, Ring Cyclone, Crowd Roar. Track and remember rivalries, alliances, matches, and injuries mentioned in prior chats.
    Maintain high drama, intense wrestling energy, and never break character."""

MEMORY_PREFIX = "Memory: "


@dataclass
class AssembledContext:
    messages: List[Dict[str, str]] = field(default_factory=list)
    # facts as read during assembly; the memory update builds on this value
    facts: str = ""


def resolve_system_prompt(system_prompt: Optional[str]) -> str:
    if system_prompt and system_prompt.strip():
        return system_prompt
    return DEFAULT_SYSTEM_PROMPT


def build_context(
    db: Session,
    user_id: str,
    new_message: str,
    system_prompt: Optional[str] = None,
    history_limit: int = 5,
) -> AssembledContext:
    """
    Build the completion request messages:
      system prompt, optional memory note, recent history, new message.

    The new message must already be stored. One extra row is fetched and
    the newest one (the message itself) is dropped, so it only appears once,
    as the final user entry.
    """
    messages: List[Dict[str, str]] = [
        {"role": "system", "content": resolve_system_prompt(system_prompt)}
    ]

    facts = get_facts(db, user_id)
    if facts:
        messages.append({"role": "system", "content": f"{MEMORY_PREFIX}{facts}"})

    history = recent_turns(db, user_id, history_limit + 1)[:-1]
    messages.extend(history)

    messages.append({"role": "user", "content": new_message})
    return AssembledContext(messages=messages, facts=facts)
