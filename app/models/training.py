"""
Training and training-drill database models.

A training is scheduled for a team and may contain an ordered list of
drill *instances*.  A drill instance is the highest-priority drill
configuration source for a session.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.drill_template import DrillConfigColumns
from app.models.enums import TrainingStatus


class Training(SQLModel, table=True):
    """A scheduled training owned by a team."""

    __tablename__ = "trainings"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: Optional[int] = Field(default=None, index=True)
    title: str = Field(nullable=False, max_length=255)
    status: str = Field(default=TrainingStatus.PLANNED.value, max_length=20, nullable=False, index=True)

    scheduled_at: Optional[datetime.datetime] = Field(default=None)
    # Past this instant the training auto-closes on the next recheck
    deadline_at: Optional[datetime.datetime] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class TrainingDrill(DrillConfigColumns, table=True):
    """A drill instance configured inside a training."""

    __tablename__ = "training_drills"

    id: Optional[int] = Field(default=None, primary_key=True)
    training_id: int = Field(foreign_key="trainings.id", nullable=False, index=True)
    order_index: int = Field(default=1, nullable=False)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
