"""
Training repository.

Read access to trainings and their drill instances, plus status updates
used by the auto-close recheck.
"""

from typing import Optional

from sqlalchemy import func
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.models.training import Training, TrainingDrill


class TrainingRepository(BaseRepository):
    """Repository for Training and TrainingDrill database operations."""

    def create(self, training: Training) -> Training:
        return self._save(training)

    def get_by_id(self, training_id: int) -> Optional[Training]:
        return self.session.get(Training, training_id)

    def update(self, training: Training) -> Training:
        return self._save(training)

    # ------------------------------------------------------------------
    # Drill instances
    # ------------------------------------------------------------------

    def add_drill(self, drill: TrainingDrill) -> TrainingDrill:
        return self._save(drill)

    def get_drill(self, drill_id: int) -> Optional[TrainingDrill]:
        return self.session.get(TrainingDrill, drill_id)

    def count_drills(self, training_id: int) -> int:
        statement = (select(func.count()).select_from(TrainingDrill)
                     .where(TrainingDrill.training_id == training_id))
        return self.session.exec(statement).first() or 0

    def get_drill_ids(self, training_id: int) -> list[int]:
        statement = select(TrainingDrill.id).where(TrainingDrill.training_id == training_id)
        return list(self.session.exec(statement).all())
