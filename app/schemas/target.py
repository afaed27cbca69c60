"""
Session target and result API schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from app.models.enums import InputMethod, PaperType, TargetType


class TargetDetails(BaseModel):
    """Descriptive target fields.  Not used by any gating logic."""

    distance_m: Optional[float] = Field(None, ge=0)
    lane_number: Optional[int] = Field(None, ge=1)
    planned_shots: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)
    target_data: Optional[dict[str, Any]] = None


class SessionTargetCreate(TargetDetails):
    target_type: TargetType


class PaperResultCreate(BaseModel):
    paper_type: PaperType = PaperType.ACHIEVEMENT
    bullets_fired: int = Field(..., ge=0)
    hits_total: Optional[int] = Field(None, ge=0)
    hits_inside_scoring: Optional[int] = Field(None, ge=0)
    dispersion_cm: Optional[float] = Field(None, ge=0)
    offset_right_cm: Optional[float] = None
    offset_up_cm: Optional[float] = None
    input_method: Optional[InputMethod] = Field(
        None,
        description="Provenance; derived from scanned_image_url when omitted",
    )
    scanned_image_url: Optional[str] = Field(None, max_length=1000)
    notes: Optional[str] = Field(None, max_length=1000)

    @property
    def resolved_input_method(self) -> InputMethod:
        if self.input_method is not None:
            return self.input_method
        return InputMethod.SCAN if self.scanned_image_url else InputMethod.MANUAL


class TacticalResultCreate(BaseModel):
    bullets_fired: int = Field(..., ge=0)
    hits: int = Field(..., ge=0)
    is_stage_cleared: bool = False
    time_seconds: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class PaperTargetLog(BaseModel):
    """Append a paper target and its result in one call."""

    target: TargetDetails = Field(default_factory=TargetDetails)
    result: PaperResultCreate


class TacticalTargetLog(BaseModel):
    """Append a tactical target and its result in one call."""

    target: TargetDetails = Field(default_factory=TargetDetails)
    result: TacticalResultCreate


# ----------------------------------------------------------------------
# Read models
# ----------------------------------------------------------------------


class PaperResultResponse(BaseModel):
    id: Optional[int] = None
    session_target_id: Optional[int] = None
    paper_type: PaperType = PaperType.ACHIEVEMENT
    bullets_fired: int
    hits_total: Optional[int] = None
    hits_inside_scoring: Optional[int] = None
    dispersion_cm: Optional[float] = None
    offset_right_cm: Optional[float] = None
    offset_up_cm: Optional[float] = None
    input_method: InputMethod = InputMethod.MANUAL
    scanned_image_url: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

    @property
    def is_manual(self) -> bool:
        return self.input_method == InputMethod.MANUAL


class TacticalResultResponse(BaseModel):
    id: Optional[int] = None
    session_target_id: Optional[int] = None
    bullets_fired: int
    hits: int
    is_stage_cleared: bool = False
    time_seconds: Optional[float] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SessionTargetResponse(BaseModel):
    """A target with its (optional) attached result."""

    id: Optional[int] = None
    session_id: Optional[int] = None
    target_type: TargetType
    sequence_in_session: int
    distance_m: Optional[float] = None
    lane_number: Optional[int] = None
    planned_shots: Optional[int] = None
    notes: Optional[str] = None
    target_data: Optional[dict[str, Any]] = None
    paper_result: Optional[PaperResultResponse] = None
    tactical_result: Optional[TacticalResultResponse] = None

    class Config:
        from_attributes = True
