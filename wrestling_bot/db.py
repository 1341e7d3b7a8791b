# /wrestling_bot/db.py
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

SessionLocal = sessionmaker(autoflush=False)


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def init_db(database_url: Optional[str] = None, engine: Optional[Engine] = None) -> Engine:
    """
    Bind the session factory and create tables if missing.
    Idempotent: safe to call on every startup.
    """
    # models must be imported so their tables register on Base.metadata
    from . import models  # noqa: F401

    if engine is None:
        if database_url is None:
            raise ValueError("database_url or engine is required")
        engine = make_engine(database_url)

    Base.metadata.create_all(bind=engine)
    SessionLocal.configure(bind=engine)
    return engine


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
