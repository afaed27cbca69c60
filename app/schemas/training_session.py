"""
Training session API schemas.

Every session needs exactly one drill source: a training drill
(``drill_id``), a drill template (``drill_template_id``) or an inline
``custom_drill_config``.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.enums import SessionMode, SessionStatus
from app.schemas.drill import CustomDrillConfigCreate, DrillConfig, DrillSource


class TrainingSessionCreate(BaseModel):
    """Schema for creating a session."""

    team_id: Optional[int] = Field(None, description="None for personal sessions")
    training_id: Optional[int] = Field(None, description="Link the session to a training")
    drill_id: Optional[int] = Field(None, description="Training drill instance to run")
    drill_template_id: Optional[int] = Field(None, description="Drill template for quick practice")
    custom_drill_config: Optional[CustomDrillConfigCreate] = None
    session_mode: SessionMode = SessionMode.SOLO


class TrainingSessionStart(BaseModel):
    """Schema for starting a session inside a training."""

    drill_id: Optional[int] = None
    session_mode: SessionMode = SessionMode.SOLO


class WatchSessionData(BaseModel):
    """Shot data recorded by a paired watch."""

    shots_recorded: int = Field(..., ge=0)
    duration_ms: Optional[int] = Field(None, ge=0)
    distance_m: Optional[float] = Field(None, ge=0)
    completed: bool = False


class TrainingSessionResponse(BaseModel):
    """Schema for a session in API responses."""

    id: int
    user_id: int
    team_id: Optional[int]
    training_id: Optional[int]
    training_title: Optional[str] = None
    drill_id: Optional[int]
    drill_template_id: Optional[int]
    drill_name: Optional[str] = None
    drill_source: Optional[DrillSource] = None
    session_mode: SessionMode
    status: SessionStatus
    is_stale: bool = Field(False, description="Active for longer than the stale threshold")
    started_at: datetime.datetime
    ended_at: Optional[datetime.datetime]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @property
    def drill_config(self) -> Optional[DrillConfig]:
        return self.drill_source.config if self.drill_source else None
