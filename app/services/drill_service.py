"""
Drill service.

Loads the rows behind a session's drill references and resolves them to
a single :data:`DrillSource`.
"""

from typing import Optional

from sqlmodel import Session

from app.db.repositories.drill_template import DrillTemplateRepository
from app.db.repositories.training import TrainingRepository
from app.engine.drill_source import resolve_drill_source
from app.models.training_session import TrainingSession
from app.schemas.drill import DrillSource


class DrillService:
    """Service for drill lookups."""

    def __init__(self, session: Session):
        self.trainings = TrainingRepository(session)
        self.templates = DrillTemplateRepository(session)

    def resolve_for_session(self, entry: TrainingSession) -> Optional[DrillSource]:
        training_drill = self.trainings.get_drill(entry.drill_id) if entry.drill_id is not None else None
        template = (self.templates.get_by_id(entry.drill_template_id)
                    if entry.drill_template_id is not None else None)
        return resolve_drill_source(training_drill, template, entry.custom_drill_config)
