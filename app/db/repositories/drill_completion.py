"""
Drill completion repository.

Completion records are written once per session and read by the
training auto-close recheck.
"""

from typing import Optional

from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.models.drill_completion import DrillCompletion


class DrillCompletionRepository(BaseRepository):
    """Repository for DrillCompletion database operations."""

    def create(self, record: DrillCompletion) -> DrillCompletion:
        return self._save(record)

    def get_by_session(self, session_id: int) -> Optional[DrillCompletion]:
        statement = select(DrillCompletion).where(DrillCompletion.session_id == session_id)
        return self.session.exec(statement).first()

    def get_by_training(self, training_id: int) -> list[DrillCompletion]:
        statement = (select(DrillCompletion).where(DrillCompletion.training_id == training_id)
                     .order_by(DrillCompletion.completed_at))
        return list(self.session.exec(statement).all())

