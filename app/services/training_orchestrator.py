"""
Training orchestration collaborator.

Session termination emits one outbound message per drill session:
"recheck whether training N should auto-close".  What happens on that
message is decided here, not by the session engine.
"""

import datetime
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from sqlmodel import Session

from app.core.exceptions import NotFound
from app.db.repositories.drill_completion import DrillCompletionRepository
from app.db.repositories.training import TrainingRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.models.enums import TrainingStatus

logger = logging.getLogger(__name__)


class TrainingOrchestrator(ABC):
    """Receiver of the auto-close recheck signal."""

    @abstractmethod
    def recheck_auto_close(self, training_id: int) -> str:
        """Re-evaluate the training and return its (possibly new) status."""
        ...


class NullTrainingOrchestrator(TrainingOrchestrator):
    """Ignores the signal.  For callers without a training backend."""

    def recheck_auto_close(self, training_id: int) -> str:
        return "unchanged"


class DatabaseTrainingOrchestrator(TrainingOrchestrator):
    """Closes a training when its deadline has passed or every participant has completed every drill.

    Participants are the users with at least one session in the training.
    """

    _OPEN_STATUSES = (TrainingStatus.PLANNED, TrainingStatus.ONGOING)

    def __init__(self, session: Session, clock: Optional[Callable[[], datetime.datetime]] = None):
        self.trainings = TrainingRepository(session)
        self.completions = DrillCompletionRepository(session)
        self.sessions = TrainingSessionRepository(session)
        self._now = clock or datetime.datetime.utcnow

    def recheck_auto_close(self, training_id: int) -> str:
        training = self.trainings.get_by_id(training_id)
        if training is None:
            raise NotFound("Training", training_id)

        if training.status not in self._OPEN_STATUSES:
            return training.status

        now = self._now()
        expired = training.deadline_at is not None and now >= training.deadline_at

        all_done = self._everyone_completed_every_drill(training_id)

        if expired or all_done:
            training.status = TrainingStatus.FINISHED.value
            training.updated_at = now
            self.trainings.update(training)
            logger.info("Training %s auto-closed (%s)", training_id,
                        "deadline passed" if expired else "all participants completed all drills")

        return training.status

    def _everyone_completed_every_drill(self, training_id: int) -> bool:
        drill_ids = self.trainings.get_drill_ids(training_id)
        participant_ids = self.sessions.get_participant_ids(training_id)
        if not drill_ids or not participant_ids:
            return False

        completed = {(record.user_id, record.drill_id) for record in self.completions.get_by_training(training_id)}
        return all((user_id, drill_id) in completed for user_id in participant_ids for drill_id in drill_ids)
