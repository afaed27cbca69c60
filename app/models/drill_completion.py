"""
Drill completion database model.

Persisted once, when a terminating session passes all four completion
gates of its training drill.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class DrillCompletion(SQLModel, table=True):
    """Proof that a drill's requirements were met during a session."""

    __tablename__ = "drill_completions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    training_id: int = Field(foreign_key="trainings.id", nullable=False, index=True)
    drill_id: int = Field(foreign_key="training_drills.id", nullable=False, index=True)
    session_id: int = Field(foreign_key="sessions.id", nullable=False, unique=True)

    completed_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    # Headline numbers (also contained in the snapshot)
    shots_fired: int = Field(default=0, nullable=False)
    hits: int = Field(default=0, nullable=False)
    accuracy_pct: float = Field(default=0.0, nullable=False)
    time_seconds: Optional[float] = Field(default=None)

    stats_snapshot: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )
