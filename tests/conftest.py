"""Pytest fixtures for engine and API tests."""

import os
from collections.abc import Generator
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.db.models import PracticeSession, Student, StudentAchievement, WordProgress
from app.db.store import DocumentStore
from app.main import create_app

TABLES = [
    Student.__table__,
    WordProgress.__table__,
    PracticeSession.__table__,
    StudentAchievement.__table__,
]


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))
        engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def store(db_session: Session) -> DocumentStore:
    return DocumentStore(db_session)


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def students(db_session: Session) -> list[Student]:
    rows = [
        Student(id="S1", first_name="Ana", last_name="Lopez", total_xp=0),
        Student(id="S2", first_name="Ben", last_name="Ito", total_xp=1000),
        Student(id="S3", first_name="Cleo", last_name="Marsh", total_xp=2450),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
