"""Pydantic schemas for request/response validation."""

from app.schemas.completion import CompletionEvaluation, DrillCompletionResponse
from app.schemas.drill import (
    CustomDrillConfigCreate,
    DrillConfig,
    DrillProgress,
    DrillRequirements,
    DrillSource,
    NextTargetPlan,
)
from app.schemas.stats import ScoreResponse, SessionStats
from app.schemas.target import (
    PaperResultCreate,
    PaperTargetLog,
    SessionTargetCreate,
    SessionTargetResponse,
    TacticalResultCreate,
    TacticalTargetLog,
)
from app.schemas.training_session import (
    TrainingSessionCreate,
    TrainingSessionResponse,
    TrainingSessionStart,
    WatchSessionData,
)

__all__ = [
    "CompletionEvaluation",
    "DrillCompletionResponse",
    "CustomDrillConfigCreate",
    "DrillConfig",
    "DrillProgress",
    "DrillRequirements",
    "DrillSource",
    "NextTargetPlan",
    "ScoreResponse",
    "SessionStats",
    "PaperResultCreate",
    "PaperTargetLog",
    "SessionTargetCreate",
    "SessionTargetResponse",
    "TacticalResultCreate",
    "TacticalTargetLog",
    "TrainingSessionCreate",
    "TrainingSessionResponse",
    "TrainingSessionStart",
    "WatchSessionData",
]
