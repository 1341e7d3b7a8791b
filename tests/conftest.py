from __future__ import annotations

from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from wrestling_bot.app import create_app
from wrestling_bot.config import Settings
from wrestling_bot.db import SessionLocal, init_db
from wrestling_bot.errors import UpstreamError


class FakeGateway:
    def __init__(self, reply: str = "I charge forward!", error: UpstreamError | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    def complete(self, messages: List[Dict[str, str]]) -> str:
        self.calls.append([dict(m) for m in messages])
        if self.error is not None:
            raise self.error
        return self.reply.strip()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", database_url="sqlite://")


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def client(settings, gateway, engine):
    app = create_app(settings, gateway=gateway, engine=engine)
    with TestClient(app) as c:
        yield c
