"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.drill_template import DrillTemplate  # noqa: F401
from app.models.training import Training, TrainingDrill  # noqa: F401
from app.models.training_session import TrainingSession  # noqa: F401
from app.models.target import PaperTargetResult, SessionTarget, TacticalTargetResult  # noqa: F401
from app.models.drill_completion import DrillCompletion  # noqa: F401
