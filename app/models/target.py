"""
Session target and target result database models.

Targets are appended to a session with a per-session sequence number.
A paper target carries at most one :class:`PaperTargetResult`, a
tactical target at most one :class:`TacticalTargetResult`.  Rows are
written once and never updated.
"""

from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.enums import InputMethod, PaperType


class SessionTarget(SQLModel, table=True):
    """One discrete engagement within a session."""

    __tablename__ = "session_targets"
    __table_args__ = (
        UniqueConstraint("session_id", "sequence_in_session", name="uq_session_targets_session_sequence", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="sessions.id", nullable=False, index=True)
    target_type: str = Field(nullable=False, max_length=20)
    sequence_in_session: int = Field(nullable=False)

    # Descriptive only
    distance_m: Optional[float] = Field(default=None)
    lane_number: Optional[int] = Field(default=None)
    planned_shots: Optional[int] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=1000)
    target_data: Optional[dict] = Field(default=None, sa_column=Column(JSON, nullable=True), )


class PaperTargetResult(SQLModel, table=True):
    """Result of a paper target, scanned or manually reported."""

    __tablename__ = "paper_target_results"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_target_id: int = Field(foreign_key="session_targets.id", nullable=False, unique=True, index=True)
    paper_type: str = Field(default=PaperType.ACHIEVEMENT.value, max_length=20, nullable=False)

    bullets_fired: int = Field(default=0, nullable=False)
    hits_total: Optional[int] = Field(default=None)
    hits_inside_scoring: Optional[int] = Field(default=None)
    dispersion_cm: Optional[float] = Field(default=None)
    offset_right_cm: Optional[float] = Field(default=None)
    offset_up_cm: Optional[float] = Field(default=None)

    # Provenance: scanned results count every detected hole as a hit
    input_method: str = Field(default=InputMethod.MANUAL.value, max_length=10, nullable=False)
    scanned_image_url: Optional[str] = Field(default=None, max_length=1000)
    notes: Optional[str] = Field(default=None, max_length=1000)


class TacticalTargetResult(SQLModel, table=True):
    """Result of a tactical target.  Always manually reported."""

    __tablename__ = "tactical_target_results"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_target_id: int = Field(foreign_key="session_targets.id", nullable=False, unique=True, index=True)

    bullets_fired: int = Field(default=0, nullable=False)
    hits: int = Field(default=0, nullable=False)
    is_stage_cleared: bool = Field(default=False, nullable=False)
    time_seconds: Optional[float] = Field(default=None)
    notes: Optional[str] = Field(default=None, max_length=1000)
