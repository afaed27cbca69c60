"""SQLModel database models."""

from app.models.drill_completion import DrillCompletion
from app.models.drill_template import DrillTemplate
from app.models.target import PaperTargetResult, SessionTarget, TacticalTargetResult
from app.models.training import Training, TrainingDrill
from app.models.training_session import TrainingSession

__all__ = [
    "DrillCompletion",
    "DrillTemplate",
    "PaperTargetResult",
    "SessionTarget",
    "TacticalTargetResult",
    "Training",
    "TrainingDrill",
    "TrainingSession",
]
