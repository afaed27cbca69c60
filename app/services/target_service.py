"""
Session target service.

Appends targets to a live session and attaches their results.  Targets
and results are never updated once written; a session only accepts new
targets while it is active.
"""

import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import ConflictError, InvalidSessionState, NotFound, ValidationError
from app.db.repositories.target import ResultT, SessionTargetRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.engine.requirements import check_drill_limits
from app.engine.stats import calculate_session_stats
from app.models.enums import TargetType
from app.models.target import PaperTargetResult, SessionTarget, TacticalTargetResult
from app.models.training_session import TrainingSession
from app.schemas.stats import SessionStats
from app.schemas.target import (PaperResultCreate, PaperResultResponse, PaperTargetLog, SessionTargetCreate,
                                SessionTargetResponse, TacticalResultCreate, TacticalResultResponse, TacticalTargetLog,
                                TargetDetails, )
from app.services.drill_service import DrillService

logger = logging.getLogger(__name__)


class TargetService:
    """Service for session targets and their results."""

    def __init__(self, session: Session):
        self.sessions = TrainingSessionRepository(session)
        self.repository = SessionTargetRepository(session)
        self.drills = DrillService(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append_target(self, user_id: int, session_id: int, data: SessionTargetCreate, ) -> SessionTargetResponse:
        """Append a target without a result.  Drill limits are not checked here."""
        entry = self._get_owned_session(user_id, session_id, require_active=True)
        target = self._insert_target(entry.id, data.target_type, data)
        return self._to_response(target)

    def attach_paper_result(self, user_id: int, target_id: int, data: PaperResultCreate, ) -> SessionTargetResponse:
        target = self._get_open_target(user_id, target_id, TargetType.PAPER)
        if self.repository.get_paper_result(target.id) is not None:
            raise ConflictError(f"Target {target.id} already has a result")

        result = self.repository.create_paper_result(self._paper_row(data, target.id))
        return self._to_response(target, paper=result)

    def attach_tactical_result(self, user_id: int, target_id: int,
                               data: TacticalResultCreate, ) -> SessionTargetResponse:
        target = self._get_open_target(user_id, target_id, TargetType.TACTICAL)
        if self.repository.get_tactical_result(target.id) is not None:
            raise ConflictError(f"Target {target.id} already has a result")

        result = self.repository.create_tactical_result(self._tactical_row(data, target.id))
        return self._to_response(target, tactical=result)

    def log_paper_target(self, user_id: int, session_id: int, data: PaperTargetLog) -> SessionTargetResponse:
        """Append a paper target with its result, enforcing the drill contract."""
        entry = self._get_owned_session(user_id, session_id, require_active=True)
        self._enforce_drill_limits(entry, TargetType.PAPER, data.result.bullets_fired)

        target, result = self._insert_with_result(entry.id, TargetType.PAPER, data.target, self._paper_row(data.result),
                                                  data.result.bullets_fired)
        return self._to_response(target, paper=result)

    def log_tactical_target(self, user_id: int, session_id: int, data: TacticalTargetLog) -> SessionTargetResponse:
        """Append a tactical target with its result, enforcing the drill contract."""
        entry = self._get_owned_session(user_id, session_id, require_active=True)
        self._enforce_drill_limits(entry, TargetType.TACTICAL, data.result.bullets_fired)
        return self.append_tactical_entry(entry, data.target, data.result)

    def list_targets(self, user_id: int, session_id: int) -> list[SessionTargetResponse]:
        entry = self._get_owned_session(user_id, session_id)
        return self.get_target_responses(entry.id)

    # ------------------------------------------------------------------
    # Used by the session service
    # ------------------------------------------------------------------

    def get_target_responses(self, session_id: int) -> list[SessionTargetResponse]:
        return [self._to_response(target, paper, tactical)
                for target, paper, tactical in self.repository.get_with_results(session_id)]

    def get_session_stats(self, session_id: int) -> SessionStats:
        return calculate_session_stats(self.get_target_responses(session_id))

    def append_tactical_entry(self, entry: TrainingSession, details: TargetDetails,
                              result: TacticalResultCreate, ) -> SessionTargetResponse:
        target, row = self._insert_with_result(entry.id, TargetType.TACTICAL, details, self._tactical_row(result),
                                               result.bullets_fired)
        return self._to_response(target, tactical=row)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _get_owned_session(self, user_id: int, session_id: int, require_active: bool = False, ) -> TrainingSession:
        entry = self.sessions.get_by_id(session_id)
        if not entry or entry.user_id != user_id:
            raise NotFound("Session", session_id)
        if require_active and not entry.is_active:
            raise InvalidSessionState(f"Session {session_id} is {entry.status}; targets can only be added "
                                      f"to an active session")
        return entry

    def _get_open_target(self, user_id: int, target_id: int, target_type: TargetType) -> SessionTarget:
        target = self.repository.get_by_id(target_id)
        if not target:
            raise NotFound("Target", target_id)
        self._get_owned_session(user_id, target.session_id, require_active=True)
        if target.target_type != target_type.value:
            raise ValidationError(f"Target {target_id} is a {target.target_type} target, "
                                  f"not {target_type.value}")
        return target

    def _enforce_drill_limits(self, entry: TrainingSession, target_type: TargetType, bullets_fired: int) -> None:
        source = self.drills.resolve_for_session(entry)
        if source is None:
            return
        stats = self.get_session_stats(entry.id)
        check_drill_limits(source.config, stats, target_type, bullets_fired)

    def _new_target(self, session_id: int, target_type: TargetType, details: TargetDetails,
                    bullets_fired: Optional[int] = None, ) -> SessionTarget:
        sequence = self.repository.count_by_session(session_id) + 1
        planned_shots = details.planned_shots if details.planned_shots is not None else bullets_fired
        return SessionTarget(session_id=session_id, target_type=target_type.value, sequence_in_session=sequence,
                             distance_m=details.distance_m, lane_number=details.lane_number,
                             planned_shots=planned_shots, notes=details.notes, target_data=details.target_data, )

    def _insert_target(self, session_id: int, target_type: TargetType, details: TargetDetails) -> SessionTarget:
        target = self.repository.create(self._new_target(session_id, target_type, details))
        logger.debug("Appended %s target #%d to session %s", target_type.value, target.sequence_in_session,
                     session_id)
        return target

    def _insert_with_result(self, session_id: int, target_type: TargetType, details: TargetDetails,
                            result: ResultT, bullets_fired: int, ) -> tuple[SessionTarget, ResultT]:
        target = self._new_target(session_id, target_type, details, bullets_fired)
        target, result = self.repository.create_with_result(target, result)
        logger.debug("Logged %s target #%d to session %s", target_type.value, target.sequence_in_session,
                     session_id)
        return target, result

    @staticmethod
    def _paper_row(data: PaperResultCreate, target_id: Optional[int] = None) -> PaperTargetResult:
        return PaperTargetResult(session_target_id=target_id, paper_type=data.paper_type.value,
                                 bullets_fired=data.bullets_fired, hits_total=data.hits_total,
                                 hits_inside_scoring=data.hits_inside_scoring, dispersion_cm=data.dispersion_cm,
                                 offset_right_cm=data.offset_right_cm, offset_up_cm=data.offset_up_cm,
                                 input_method=data.resolved_input_method.value,
                                 scanned_image_url=data.scanned_image_url, notes=data.notes, )

    @staticmethod
    def _tactical_row(data: TacticalResultCreate, target_id: Optional[int] = None) -> TacticalTargetResult:
        return TacticalTargetResult(session_target_id=target_id, bullets_fired=data.bullets_fired, hits=data.hits,
                                    is_stage_cleared=data.is_stage_cleared, time_seconds=data.time_seconds,
                                    notes=data.notes, )

    @staticmethod
    def _to_response(target: SessionTarget, paper: Optional[PaperTargetResult] = None,
                     tactical: Optional[TacticalTargetResult] = None, ) -> SessionTargetResponse:
        return SessionTargetResponse(id=target.id, session_id=target.session_id, target_type=target.target_type,
                                     sequence_in_session=target.sequence_in_session, distance_m=target.distance_m,
                                     lane_number=target.lane_number, planned_shots=target.planned_shots,
                                     notes=target.notes, target_data=target.target_data,
                                     paper_result=PaperResultResponse.model_validate(paper) if paper else None,
                                     tactical_result=(TacticalResultResponse.model_validate(tactical)
                                                      if tactical else None), )
