"""
Training session repository.

Handles database operations for :class:`TrainingSession`, including the
owner/status lookups used by single-active-session enforcement.
"""

from typing import Optional

from sqlalchemy import delete
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.models.drill_completion import DrillCompletion
from app.models.enums import SessionStatus
from app.models.target import PaperTargetResult, SessionTarget, TacticalTargetResult
from app.models.training_session import TrainingSession


class TrainingSessionRepository(BaseRepository):
    """Repository for TrainingSession database operations."""

    def create(self, entry: TrainingSession) -> TrainingSession:
        return self._save(entry)

    def get_by_id(self, entry_id: int) -> Optional[TrainingSession]:
        return self.session.get(TrainingSession, entry_id)

    def get_by_user(self, user_id: int, status: Optional[SessionStatus] = None, ) -> list[TrainingSession]:
        statement = select(TrainingSession).where(TrainingSession.user_id == user_id)
        if status is not None:
            statement = statement.where(TrainingSession.status == status.value)
        statement = statement.order_by(TrainingSession.started_at.desc(), TrainingSession.id.desc())
        return list(self.session.exec(statement).all())

    def get_active_by_user(self, user_id: int) -> list[TrainingSession]:
        """All active sessions of a user.  Normally zero or one."""
        return self.get_by_user(user_id, SessionStatus.ACTIVE)

    def get_active_by_user_and_training(self, user_id: int, training_id: int, ) -> Optional[TrainingSession]:
        statement = (select(TrainingSession).where(TrainingSession.user_id == user_id,
                                                   TrainingSession.training_id == training_id,
                                                   TrainingSession.status == SessionStatus.ACTIVE.value, ).order_by(
            TrainingSession.started_at.desc()))
        return self.session.exec(statement).first()

    def get_participant_ids(self, training_id: int) -> list[int]:
        """Distinct users with at least one session in the training."""
        statement = select(TrainingSession.user_id).where(TrainingSession.training_id == training_id).distinct()
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, entry: TrainingSession) -> TrainingSession:
        return self._save(entry)

    def delete(self, entry_id: int) -> bool:
        """Delete a session together with its targets, results and completion record."""
        entry = self.get_by_id(entry_id)
        if not entry:
            return False

        target_ids = select(SessionTarget.id).where(SessionTarget.session_id == entry_id)
        self.session.exec(delete(PaperTargetResult).where(PaperTargetResult.session_target_id.in_(target_ids)))
        self.session.exec(delete(TacticalTargetResult).where(TacticalTargetResult.session_target_id.in_(target_ids)))
        self.session.exec(delete(SessionTarget).where(SessionTarget.session_id == entry_id))
        self.session.exec(delete(DrillCompletion).where(DrillCompletion.session_id == entry_id))
        self.session.delete(entry)
        self._commit()
        return True
