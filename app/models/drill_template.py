"""
Drill template database model.

Also defines :class:`DrillConfigColumns`, the column set shared by
drill templates and training drill instances.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.enums import DrillGoal, TargetType

# ``rounds_per_shooter`` value meaning "no upper bound" (paper scan drills)
INFINITE_SHOTS_SENTINEL = 999


class DrillConfigColumns(SQLModel):
    """Drill configuration columns (not a table)."""

    name: str = Field(nullable=False, max_length=255)
    drill_goal: str = Field(default=DrillGoal.ACHIEVEMENT.value, max_length=20, nullable=False)
    target_type: str = Field(default=TargetType.PAPER.value, max_length=20, nullable=False)
    distance_m: float = Field(default=25.0, nullable=False)
    rounds_per_shooter: int = Field(default=5, nullable=False)

    # Number of required entries (rounds); None or <= 0 means one
    strings_count: Optional[int] = Field(default=None)
    target_count: Optional[int] = Field(default=None)

    time_limit_seconds: Optional[float] = Field(default=None)
    par_time_seconds: Optional[float] = Field(default=None)
    min_accuracy_percent: Optional[float] = Field(default=None)

    scoring_mode: Optional[str] = Field(default=None, max_length=20)
    points_per_hit: Optional[float] = Field(default=None)
    penalty_per_miss: Optional[float] = Field(default=None)

    # Descriptive
    position: Optional[str] = Field(default=None, max_length=50)
    weapon_category: Optional[str] = Field(default=None, max_length=50)
    difficulty: Optional[str] = Field(default=None, max_length=20)
    instructions: Optional[str] = Field(default=None, max_length=2000)
    safety_notes: Optional[str] = Field(default=None, max_length=2000)


class DrillTemplate(DrillConfigColumns, table=True):
    """Reusable drill from a team (or personal) drill library."""

    __tablename__ = "drill_templates"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: Optional[int] = Field(default=None, index=True)
    created_by: Optional[int] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
