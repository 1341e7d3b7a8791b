from __future__ import annotations

import pytest

import wrestling_bot.memory as memory
from wrestling_bot.memory import compute_updated_facts, update_memory
from wrestling_bot.store import get_facts


def test_match_note() -> None:
    assert compute_updated_facts("", "Let's start the MATCH") == " | New match discussed: Let's start the MATCH"


@pytest.mark.parametrize("msg", ["Tornado SLAM!", "my knee is injured", "that was painful", "Ring Cyclone", "touching"])
def test_notable_event_note(msg: str) -> None:
    assert compute_updated_facts("prior", msg) == f"prior | Notable event: {msg}"


def test_both_triggers_append_in_order() -> None:
    msg = "I slam you to win the match"
    assert compute_updated_facts("", msg) == (
        f" | New match discussed: {msg} | Notable event: {msg}"
    )


def test_no_trigger_leaves_facts_unchanged() -> None:
    assert compute_updated_facts("kept", "hello there") == "kept"


def test_no_write_without_trigger(db, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(memory, "upsert_facts", lambda *a, **kw: calls.append(a))

    assert update_memory(db, "u1", "", "hello there") is False
    assert calls == []


def test_same_message_twice_grows_twice(db) -> None:
    msg = "rematch time"
    update_memory(db, "u1", get_facts(db, "u1"), msg)
    update_memory(db, "u1", get_facts(db, "u1"), msg)

    facts = get_facts(db, "u1")
    assert facts == f" | New match discussed: {msg} | New match discussed: {msg}"
    assert facts.count(" | ") == 2
