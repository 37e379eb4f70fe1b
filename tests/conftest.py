"""
Shared fixtures: an in-memory SQLite store per test, the FastAPI app wired to
it, and small record factories.
"""

from __future__ import annotations

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import gazetteer.db.models  # noqa: F401
from gazetteer.core.security import sign_token
from gazetteer.db.base import Base
from gazetteer.db.models import County, Place
from gazetteer.db.session import enable_sqlite_foreign_keys, get_db
from gazetteer.main import app


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    # One shared connection so every session sees the same in-memory database.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {sign_token('tester')}"}


@pytest.fixture
def make_county(db: Session) -> Callable[..., County]:
    def _make(name: str = "Pest") -> County:
        county = County(name=name)
        db.add(county)
        db.commit()
        db.refresh(county)
        return county

    return _make


@pytest.fixture
def make_place(db: Session) -> Callable[..., Place]:
    def _make(county: County, name: str, postal_code: str = "1000") -> Place:
        place = Place(postal_code=postal_code, name=name, county_id=county.id)
        db.add(place)
        db.commit()
        db.refresh(place)
        return place

    return _make


@pytest.fixture
def count_rows(session_factory: sessionmaker) -> Callable[[type], int]:
    """Row count read through a fresh session, independent of the test's own session state."""

    def _count(model: type) -> int:
        with session_factory() as s:
            return s.query(model).count()

    return _count
