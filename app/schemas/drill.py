"""
Drill configuration schemas.

Whatever its origin (training drill instance, drill template or inline
custom config), a session's drill is read through one normalized
:class:`DrillConfig`.  The origin is kept as a tagged union,
:data:`DrillSource`, so callers never branch on which foreign key
happens to be set.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.models.enums import DrillGoal, TargetType


class DrillConfig(BaseModel):
    """Resolved, read-only drill configuration."""

    id: Optional[int] = Field(None, description="Source row id (None for custom configs)")
    name: str
    drill_goal: DrillGoal = DrillGoal.ACHIEVEMENT
    target_type: TargetType
    distance_m: float
    rounds_per_shooter: int = Field(..., description="Bullets per entry; 999 means unbounded")
    strings_count: Optional[int] = Field(None, description="Required entries; None or <= 0 means 1")
    target_count: Optional[int] = None
    time_limit_seconds: Optional[float] = None
    par_time_seconds: Optional[float] = None
    min_accuracy_percent: Optional[float] = None
    scoring_mode: Optional[str] = None
    points_per_hit: Optional[float] = None
    penalty_per_miss: Optional[float] = None

    position: Optional[str] = None
    weapon_category: Optional[str] = None
    difficulty: Optional[str] = None
    instructions: Optional[str] = None
    safety_notes: Optional[str] = None

    class Config:
        from_attributes = True


class CustomDrillConfigCreate(BaseModel):
    """Inline drill configuration for quick practice (no template)."""

    name: str = Field("Quick Practice", max_length=255)
    drill_goal: DrillGoal = DrillGoal.GROUPING
    target_type: TargetType = TargetType.PAPER
    distance_m: float = Field(..., description="Must be > 0 for the config to count")
    rounds_per_shooter: int = Field(..., description="Must be > 0 for the config to count")
    time_limit_seconds: Optional[float] = Field(None, gt=0)
    strings_count: Optional[int] = Field(None, description="Number of entries (None = one)")

    @property
    def is_usable(self) -> bool:
        return self.distance_m > 0 and self.rounds_per_shooter > 0


# ----------------------------------------------------------------------
# Tagged union of drill sources
# ----------------------------------------------------------------------


class TrainingDrillSource(BaseModel):
    kind: Literal["training_drill"] = "training_drill"
    drill_id: int
    training_id: int
    config: DrillConfig


class DrillTemplateSource(BaseModel):
    kind: Literal["drill_template"] = "drill_template"
    drill_template_id: int
    config: DrillConfig


class CustomDrillSource(BaseModel):
    kind: Literal["custom"] = "custom"
    config: DrillConfig


DrillSource = Annotated[
    Union[TrainingDrillSource, DrillTemplateSource, CustomDrillSource],
    Field(discriminator="kind"),
]


# ----------------------------------------------------------------------
# Derived requirements and progress
# ----------------------------------------------------------------------


class DrillRequirements(BaseModel):
    """Concrete numeric requirements derived from a drill."""

    rounds: int
    required_targets: int
    required_shots: int = Field(..., description="Always 0 for paper drills")
    is_paper: bool
    bullets_per_round: int


class NextTargetPlan(BaseModel):
    remaining_shots: int
    remaining_targets: int
    next_bullets: int = Field(..., description="Exact bullet count expected for the next tactical entry")


class DrillProgress(BaseModel):
    """Live progress of a session against its drill."""

    requirements: DrillRequirements
    shots_progress: int = Field(..., ge=0, le=100)
    targets_progress: int = Field(..., ge=0, le=100)
    is_complete: bool
    meets_accuracy: bool
    meets_time: bool
    over_time: bool
    limit_reached: bool
    next_target: NextTargetPlan
