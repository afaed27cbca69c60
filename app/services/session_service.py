"""
Training session service.

Owns the session lifecycle (active -> completed | cancelled) and keeps at
most one active session per owner.  Starting a new session resolves the
owner's existing active sessions first: sessions older than the
auto-cancel threshold are cancelled, recent ones are ended normally so
their drill completion is still evaluated.

Ending a session linked to a training drill evaluates the drill's
completion gates, records a :class:`DrillCompletion` when all pass, and
asks the training orchestrator to recheck auto-close.  Both follow-ups
are bookkeeping: their failures are logged and never fail the end
operation itself.
"""

import datetime
import logging
from typing import Callable, Optional

from sqlmodel import Session

from app.core.exceptions import (ActiveSessionConflict, DrillSelectionRequired, DrillTrainingMismatch,
                                 InvalidSessionState, MissingDrillConfiguration, NotAuthenticated, NotFound,
                                 StoreConstraintViolation, StoreFailure, )
from app.db.repositories.drill_completion import DrillCompletionRepository
from app.db.repositories.drill_template import DrillTemplateRepository
from app.db.repositories.training import TrainingRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.engine.completion import evaluate_drill_completion
from app.engine.requirements import compute_drill_progress
from app.engine.scoring import calculate_score
from app.engine.staleness import DEFAULT_LIFECYCLE_CONFIG, LifecycleConfig, is_session_stale, should_auto_cancel
from app.models.drill_completion import DrillCompletion
from app.models.enums import SessionMode, SessionStatus, TrainingStatus
from app.models.training import TrainingDrill
from app.models.training_session import TrainingSession
from app.schemas.completion import DrillCompletionResponse
from app.schemas.drill import DrillProgress
from app.schemas.stats import ScoreResponse, SessionStats
from app.schemas.target import TacticalResultCreate, TargetDetails
from app.schemas.training_session import (TrainingSessionCreate, TrainingSessionResponse, TrainingSessionStart,
                                          WatchSessionData, )
from app.services.drill_service import DrillService
from app.services.target_service import TargetService
from app.services.training_orchestrator import NullTrainingOrchestrator, TrainingOrchestrator

logger = logging.getLogger(__name__)


class SessionService:
    """Service for the training session lifecycle."""

    def __init__(self, session: Session, orchestrator: Optional[TrainingOrchestrator] = None,
                 config: Optional[LifecycleConfig] = None,
                 clock: Optional[Callable[[], datetime.datetime]] = None, ):
        self.repository = TrainingSessionRepository(session)
        self.trainings = TrainingRepository(session)
        self.templates = DrillTemplateRepository(session)
        self.completions = DrillCompletionRepository(session)
        self.drills = DrillService(session)
        self.targets = TargetService(session)
        self.orchestrator = orchestrator or NullTrainingOrchestrator()
        self.config = config or DEFAULT_LIFECYCLE_CONFIG
        self._now = clock or datetime.datetime.utcnow

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_session(self, user_id: Optional[int], data: TrainingSessionCreate) -> TrainingSessionResponse:
        """Start a new active session for ``user_id``.

        Starting the same training drill again returns the running
        session instead of creating a second one.  All validation runs
        before any existing session is touched.

        Raises:
            NotAuthenticated: no owner.
            ActiveSessionConflict: an active session of the same training
                runs a different drill.
            MissingDrillConfiguration: no usable drill source.
            NotFound: a referenced training, drill or template is missing.
            DrillSelectionRequired / DrillTrainingMismatch: training rules.
        """
        self._require_owner(user_id)

        training_id = data.training_id
        training_drill = None
        if data.drill_id is not None and training_id is None:
            # A training drill always runs inside its training
            training_drill = self._get_training_drill(data.drill_id)
            training_id = training_drill.training_id

        if training_id is not None:
            existing = self.repository.get_active_by_user_and_training(user_id, training_id)
            if existing:
                if data.drill_id is None or existing.drill_id == data.drill_id:
                    logger.info("Joining active session %s for training %s", existing.id, training_id)
                    return self._to_response(existing)
                raise ActiveSessionConflict(
                    f"You already have an active session for training {training_id} "
                    f"(session {existing.id}, drill {existing.drill_id}). "
                    f"End it before starting drill {data.drill_id}.",
                    session_id=existing.id, training_id=training_id,
                    existing_drill_id=existing.drill_id, requested_drill_id=data.drill_id,
                )

        custom_config = data.custom_drill_config
        if custom_config is not None and not custom_config.is_usable:
            custom_config = None
        if data.drill_id is None and data.drill_template_id is None and custom_config is None:
            raise MissingDrillConfiguration()

        if data.drill_id is not None and training_drill is None:
            training_drill = self._get_training_drill(data.drill_id)
        if data.drill_template_id is not None and not self.templates.get_by_id(data.drill_template_id):
            raise NotFound("Drill template", data.drill_template_id)

        if training_id is not None:
            training = self.trainings.get_by_id(training_id)
            if not training:
                raise NotFound("Training", training_id)
            if training_drill is None:
                if self.trainings.count_drills(training_id) > 0:
                    raise DrillSelectionRequired(training_id)
            elif training_drill.training_id != training_id:
                raise DrillTrainingMismatch(training_drill.id, training_id)

        self._supersede_active_sessions(user_id)

        now = self._now()
        custom_json = custom_config.model_dump(mode="json") if custom_config else None
        entry = TrainingSession(user_id=user_id, team_id=data.team_id, training_id=training_id, drill_id=data.drill_id,
                                drill_template_id=data.drill_template_id, custom_drill_config=custom_json,
                                session_mode=data.session_mode.value, status=SessionStatus.ACTIVE.value,
                                started_at=now, created_at=now, updated_at=now, )
        try:
            entry = self.repository.create(entry)
        except StoreConstraintViolation as exc:
            raise ActiveSessionConflict("Another session was started at the same time. Try again.",
                                        training_id=training_id, requested_drill_id=data.drill_id, ) from exc

        logger.info("Started session %s for user %s (training=%s, drill=%s, template=%s)", entry.id, user_id,
                    entry.training_id, entry.drill_id, entry.drill_template_id)
        return self._to_response(entry)

    def start_quick_practice(self, user_id: Optional[int], drill_template_id: int) -> TrainingSessionResponse:
        """Start a solo session from a drill template."""
        self._require_owner(user_id)
        template = self.templates.get_by_id(drill_template_id)
        if not template:
            raise NotFound("Drill template", drill_template_id)

        data = TrainingSessionCreate(team_id=template.team_id, drill_template_id=template.id,
                                     session_mode=SessionMode.SOLO, )
        return self.create_session(user_id, data)

    def create_training_session(self, user_id: Optional[int], training_id: int,
                                data: TrainingSessionStart, ) -> TrainingSessionResponse:
        self._require_owner(user_id)
        training = self.trainings.get_by_id(training_id)
        if not training:
            raise NotFound("Training", training_id)

        payload = TrainingSessionCreate(team_id=training.team_id, training_id=training.id, drill_id=data.drill_id,
                                        session_mode=data.session_mode, )
        return self.create_session(user_id, payload)

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def end_session(self, user_id: Optional[int], session_id: int) -> TrainingSessionResponse:
        """Complete an active session.  Terminal sessions are returned as-is."""
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        if entry.is_active:
            entry = self._end(entry)
        return self._to_response(entry)

    def cancel_session(self, user_id: Optional[int], session_id: int) -> TrainingSessionResponse:
        """Cancel an active session.  Completion is never evaluated."""
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        if entry.status == SessionStatus.CANCELLED:
            return self._to_response(entry)
        if not entry.is_active:
            raise InvalidSessionState(f"Session {session_id} is already {entry.status}")

        entry = self._transition(entry, SessionStatus.CANCELLED)
        logger.info("Cancelled session %s", entry.id)
        return self._to_response(entry)

    def delete_session(self, user_id: Optional[int], session_id: int) -> None:
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        self.repository.delete(entry.id)
        logger.info("Deleted session %s", session_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_session(self, user_id: Optional[int], session_id: int) -> TrainingSessionResponse:
        self._require_owner(user_id)
        return self._to_response(self._get_owned_entry(user_id, session_id))

    def list_sessions(self, user_id: Optional[int],
                      status: Optional[SessionStatus] = None, ) -> list[TrainingSessionResponse]:
        self._require_owner(user_id)
        return [self._to_response(e) for e in self.repository.get_by_user(user_id, status)]

    def get_active_session(self, user_id: Optional[int]) -> Optional[TrainingSessionResponse]:
        self._require_owner(user_id)
        active = self.repository.get_active_by_user(user_id)
        return self._to_response(active[0]) if active else None

    def get_session_stats(self, user_id: Optional[int], session_id: int) -> SessionStats:
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        return self.targets.get_session_stats(entry.id)

    def get_score(self, user_id: Optional[int], session_id: int) -> ScoreResponse:
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        source = self.drills.resolve_for_session(entry)
        drill = source.config if source else None
        score = calculate_score(drill, self.targets.get_session_stats(entry.id))
        return ScoreResponse(session_id=entry.id, scoring_mode=drill.scoring_mode if drill else None, score=score)

    def get_drill_progress(self, user_id: Optional[int], session_id: int) -> Optional[DrillProgress]:
        """Live progress against the session's drill, or ``None`` without a drill."""
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        source = self.drills.resolve_for_session(entry)
        if source is None:
            return None

        until = entry.ended_at or self._now()
        elapsed = max(0.0, (until - entry.started_at).total_seconds())
        return compute_drill_progress(source.config, self.targets.get_session_stats(entry.id), elapsed)

    def get_completion(self, user_id: Optional[int], session_id: int) -> Optional[DrillCompletionResponse]:
        """The drill completion recorded when the session ended, if any."""
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        record = self.completions.get_by_session(entry.id)
        return DrillCompletionResponse.model_validate(record) if record else None

    # ------------------------------------------------------------------
    # Watch integration
    # ------------------------------------------------------------------

    def record_watch_data(self, user_id: Optional[int], session_id: int,
                          data: WatchSessionData, ) -> TrainingSessionResponse:
        """Log a watch recording as one tactical target, ending the session if the watch says so."""
        self._require_owner(user_id)
        entry = self._get_owned_entry(user_id, session_id)
        if not entry.is_active:
            raise InvalidSessionState(f"Session {session_id} is {entry.status}; watch data needs an active session")

        distance = data.distance_m
        if distance is None:
            source = self.drills.resolve_for_session(entry)
            distance = source.config.distance_m if source else None

        time_seconds = data.duration_ms / 1000.0 if data.duration_ms is not None else None
        result = TacticalResultCreate(bullets_fired=data.shots_recorded, hits=data.shots_recorded,
                                      is_stage_cleared=data.completed, time_seconds=time_seconds, )
        self.targets.append_tactical_entry(entry, TargetDetails(distance_m=distance, notes="Recorded by watch"), result)
        logger.info("Recorded %d watch shot(s) for session %s", data.shots_recorded, entry.id)

        if data.completed:
            entry = self._end(entry)
        return self._to_response(entry)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_owner(user_id: Optional[int]) -> None:
        if user_id is None:
            raise NotAuthenticated()

    def _get_owned_entry(self, user_id: int, session_id: int) -> TrainingSession:
        entry = self.repository.get_by_id(session_id)
        if not entry or entry.user_id != user_id:
            raise NotFound("Session", session_id)
        return entry

    def _get_training_drill(self, drill_id: int) -> TrainingDrill:
        training_drill = self.trainings.get_drill(drill_id)
        if not training_drill:
            raise NotFound("Drill", drill_id)
        return training_drill

    def _supersede_active_sessions(self, user_id: int) -> None:
        active = self.repository.get_active_by_user(user_id)
        if not active:
            return

        logger.info("User %s has %d active session(s); closing before starting a new one", user_id, len(active))
        for entry in active:
            if should_auto_cancel(entry.started_at, self._now(), self.config):
                logger.info("Auto-cancelling stale session %s (started %s)", entry.id, entry.started_at)
                self._transition(entry, SessionStatus.CANCELLED)
            else:
                logger.info("Auto-ending session %s", entry.id)
                self._end(entry)

    def _transition(self, entry: TrainingSession, status: SessionStatus) -> TrainingSession:
        if not entry.is_active:
            raise InvalidSessionState(f"Session {entry.id} is already {entry.status}")
        now = self._now()
        entry.status = status.value
        entry.ended_at = now
        entry.updated_at = now
        return self.repository.update(entry)

    def _end(self, entry: TrainingSession) -> TrainingSession:
        entry = self._transition(entry, SessionStatus.COMPLETED)
        logger.info("Completed session %s", entry.id)

        if entry.training_id is not None and entry.drill_id is not None:
            self._record_completion(entry)
            self._request_auto_close(entry.training_id)
        return entry

    def _record_completion(self, entry: TrainingSession) -> Optional[DrillCompletion]:
        source = self.drills.resolve_for_session(entry)
        if source is None:
            logger.warning("Session %s has no resolvable drill; completion not evaluated", entry.id)
            return None

        stats = self.targets.get_session_stats(entry.id)
        evaluation = evaluate_drill_completion(source.config, stats, entry.started_at, entry.ended_at)
        if not evaluation.passed:
            req = evaluation.requirements
            logger.info("Drill %s not completed in session %s (failed: %s; targets %d/%d, shots %d/%d, "
                        "accuracy %.2f%%, duration %ds)", entry.drill_id, entry.id,
                        ", ".join(evaluation.failed_gates), stats.target_count, req.required_targets,
                        stats.total_shots_fired, req.required_shots, stats.accuracy_pct,
                        evaluation.duration_seconds)
            return None

        record = DrillCompletion(user_id=entry.user_id, training_id=entry.training_id, drill_id=entry.drill_id,
                                 session_id=entry.id, completed_at=entry.ended_at, shots_fired=stats.total_shots_fired,
                                 hits=stats.total_hits, accuracy_pct=stats.accuracy_pct,
                                 time_seconds=stats.avg_engagement_time_sec, stats_snapshot=stats.model_dump(), )
        try:
            record = self.completions.create(record)
        except StoreFailure:
            logger.exception("Failed to record completion of drill %s for session %s", entry.drill_id, entry.id)
            return None

        logger.info("Drill %s completed by user %s in session %s", entry.drill_id, entry.user_id, entry.id)
        return record

    def _request_auto_close(self, training_id: int) -> None:
        try:
            status = self.orchestrator.recheck_auto_close(training_id)
        except Exception:
            logger.exception("Auto-close recheck failed for training %s", training_id)
            return
        if status == TrainingStatus.FINISHED:
            logger.info("Training %s is finished", training_id)

    def _to_response(self, entry: TrainingSession) -> TrainingSessionResponse:
        source = self.drills.resolve_for_session(entry)

        training_title = None
        if entry.training_id is not None:
            training = self.trainings.get_by_id(entry.training_id)
            training_title = training.title if training else None

        is_stale = entry.is_active and is_session_stale(entry.started_at, self._now(), self.config)
        return TrainingSessionResponse(id=entry.id, user_id=entry.user_id, team_id=entry.team_id,
                                       training_id=entry.training_id, training_title=training_title,
                                       drill_id=entry.drill_id, drill_template_id=entry.drill_template_id,
                                       drill_name=source.config.name if source else None, drill_source=source,
                                       session_mode=entry.session_mode, status=entry.status, is_stale=is_stale,
                                       started_at=entry.started_at, ended_at=entry.ended_at,
                                       created_at=entry.created_at, updated_at=entry.updated_at, )
