"""Database repositories."""

from app.db.repositories.drill_completion import DrillCompletionRepository
from app.db.repositories.drill_template import DrillTemplateRepository
from app.db.repositories.target import SessionTargetRepository
from app.db.repositories.training import TrainingRepository
from app.db.repositories.training_session import TrainingSessionRepository

__all__ = [
    "DrillCompletionRepository",
    "DrillTemplateRepository",
    "SessionTargetRepository",
    "TrainingRepository",
    "TrainingSessionRepository",
]
