"""Business logic services."""

from app.services.drill_service import DrillService
from app.services.session_service import SessionService
from app.services.target_service import TargetService
from app.services.training_orchestrator import (
    DatabaseTrainingOrchestrator,
    NullTrainingOrchestrator,
    TrainingOrchestrator,
)

__all__ = [
    "DrillService",
    "SessionService",
    "TargetService",
    "DatabaseTrainingOrchestrator",
    "NullTrainingOrchestrator",
    "TrainingOrchestrator",
]
