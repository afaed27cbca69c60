"""Fixtures for service tests: in-memory SQLite, a fixed clock and a recording orchestrator."""

import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.services.training_orchestrator import TrainingOrchestrator

NOW = datetime.datetime(2026, 3, 2, 12, 0, 0)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime.datetime = NOW):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += datetime.timedelta(**kwargs)


class RecordingOrchestrator(TrainingOrchestrator):
    def __init__(self, fail: bool = False):
        self.calls: list[int] = []
        self.fail = fail

    def recheck_auto_close(self, training_id: int) -> str:
        self.calls.append(training_id)
        if self.fail:
            raise RuntimeError("orchestrator unavailable")
        return "ongoing"


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
def clock():
    return FixedClock()


@pytest.fixture
def orchestrator():
    return RecordingOrchestrator()


@pytest.fixture
def failing_orchestrator():
    return RecordingOrchestrator(fail=True)
