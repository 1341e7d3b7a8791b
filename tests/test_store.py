from __future__ import annotations

import pytest

from wrestling_bot.models import ConversationTurn, UserMemory
from wrestling_bot.store import append_turn, get_facts, recent_turns, upsert_facts


def test_recent_turns_oldest_first_and_bounded(db) -> None:
    for i in range(8):
        append_turn(db, "u1", f"msg {i}", "user" if i % 2 == 0 else "assistant")

    turns = recent_turns(db, "u1", 5)

    assert len(turns) == 5
    assert [t["content"] for t in turns] == ["msg 3", "msg 4", "msg 5", "msg 6", "msg 7"]
    assert turns[0] == {"role": "assistant", "content": "msg 3"}


def test_recent_turns_returns_all_when_fewer_than_limit(db) -> None:
    append_turn(db, "u1", "first", "user")
    append_turn(db, "u1", "second", "assistant")

    assert recent_turns(db, "u1", 5) == [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "second"},
    ]


def test_recent_turns_scoped_to_user(db) -> None:
    append_turn(db, "u1", "mine", "user")
    append_turn(db, "u2", "theirs", "user")

    assert recent_turns(db, "u1", 5) == [{"role": "user", "content": "mine"}]
    assert recent_turns(db, "nobody", 5) == []


def test_append_turn_rejects_unknown_role(db) -> None:
    with pytest.raises(ValueError):
        append_turn(db, "u1", "hi", "system")
    assert db.query(ConversationTurn).count() == 0


def test_get_facts_empty_when_missing(db) -> None:
    assert get_facts(db, "u1") == ""


def test_upsert_facts_creates_then_overwrites(db) -> None:
    upsert_facts(db, "u1", " | Notable event: slam")
    assert get_facts(db, "u1") == " | Notable event: slam"

    upsert_facts(db, "u1", "replaced")
    assert get_facts(db, "u1") == "replaced"
    assert db.query(UserMemory).filter(UserMemory.user_id == "u1").count() == 1
