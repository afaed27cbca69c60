"""
Training session database model.

A session is one bounded unit of live-fire activity owned by a user.
Its drill configuration comes from exactly one source, resolved at read
time in priority order: training drill instance, drill template, inline
custom configuration (stored as JSON).
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, Index, text
from sqlmodel import Field, SQLModel

from app.models.enums import SessionMode, SessionStatus


class TrainingSession(SQLModel, table=True):
    """A single live-fire session.

    At most one ``active`` row per ``user_id`` is allowed; the partial
    unique index enforces it against concurrent creations.
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("uq_sessions_one_active_per_user", "user_id", unique=True,
              postgresql_where=text("status = 'active'"), sqlite_where=text("status = 'active'"), ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)

    # Context
    team_id: Optional[int] = Field(default=None, index=True)
    training_id: Optional[int] = Field(default=None, foreign_key="trainings.id", index=True)
    drill_id: Optional[int] = Field(default=None, foreign_key="training_drills.id")
    drill_template_id: Optional[int] = Field(default=None, foreign_key="drill_templates.id")
    custom_drill_config: Optional[dict] = Field(default=None, sa_column=Column(JSON, nullable=True), )

    session_mode: str = Field(default=SessionMode.SOLO.value, max_length=10, nullable=False)
    status: str = Field(default=SessionStatus.ACTIVE.value, max_length=20, nullable=False, index=True)

    started_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow, nullable=False)
    ended_at: Optional[datetime.datetime] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE
