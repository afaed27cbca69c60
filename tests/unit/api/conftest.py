"""Fixtures for API tests: the FastAPI app on in-memory SQLite with signed bearer tokens."""

import os

os.environ.setdefault("SECRET_KEY", "unit-test-secret-key-0123456789abcdef")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.db import base  # noqa: F401
from app.core.config import settings
from app.db.session import get_db
from app.main import app


def make_token(owner_id: int) -> str:
    return jwt.encode({"sub": str(owner_id)}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token(1)}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {make_token(2)}"}
