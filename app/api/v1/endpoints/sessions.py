"""
Training session endpoints.

Session lifecycle (start, end, cancel, delete) and derived reads
(stats, score, drill progress).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_owner_id, get_session_service, get_target_service
from app.models.enums import SessionStatus
from app.schemas.completion import DrillCompletionResponse
from app.schemas.drill import DrillProgress
from app.schemas.stats import ScoreResponse, SessionStats
from app.schemas.target import PaperTargetLog, SessionTargetCreate, SessionTargetResponse, TacticalTargetLog
from app.schemas.training_session import (
    TrainingSessionCreate,
    TrainingSessionResponse,
    TrainingSessionStart,
    WatchSessionData,
)
from app.services.session_service import SessionService
from app.services.target_service import TargetService

router = APIRouter()


@router.post("", summary="Start a session.", response_model=TrainingSessionResponse,
             status_code=status.HTTP_201_CREATED, )
def create_session(data: TrainingSessionCreate, owner_id: int = Depends(get_current_owner_id),
                   service: SessionService = Depends(get_session_service), ):
    """Any active session of the caller is closed first.  Starting the
    drill that is already running returns the running session."""
    return service.create_session(owner_id, data)


@router.post("/quick-practice/{template_id}", summary="Start a quick practice session from a drill template.",
             response_model=TrainingSessionResponse, status_code=status.HTTP_201_CREATED, )
def start_quick_practice(template_id: int, owner_id: int = Depends(get_current_owner_id),
                         service: SessionService = Depends(get_session_service), ):
    return service.start_quick_practice(owner_id, template_id)


@router.post("/training/{training_id}", summary="Start a session for a training drill.",
             response_model=TrainingSessionResponse, status_code=status.HTTP_201_CREATED, )
def start_training_session(training_id: int, data: TrainingSessionStart,
                           owner_id: int = Depends(get_current_owner_id),
                           service: SessionService = Depends(get_session_service), ):
    return service.create_training_session(owner_id, training_id, data)


@router.get("", summary="List sessions.", response_model=list[TrainingSessionResponse], )
def list_sessions(status_filter: Optional[SessionStatus] = Query(None, alias="status", description="Status filter"),
                  owner_id: int = Depends(get_current_owner_id),
                  service: SessionService = Depends(get_session_service), ):
    return service.list_sessions(owner_id, status_filter)


@router.get("/active", summary="Get the active session, if any.", response_model=Optional[TrainingSessionResponse], )
def get_active_session(owner_id: int = Depends(get_current_owner_id),
                       service: SessionService = Depends(get_session_service), ):
    return service.get_active_session(owner_id)


@router.get("/{session_id}", summary="Get a session.", response_model=TrainingSessionResponse, )
def get_session(session_id: int, owner_id: int = Depends(get_current_owner_id),
                service: SessionService = Depends(get_session_service), ):
    return service.get_session(owner_id, session_id)


@router.post("/{session_id}/end", summary="End a session.", response_model=TrainingSessionResponse, )
def end_session(session_id: int, owner_id: int = Depends(get_current_owner_id),
                service: SessionService = Depends(get_session_service), ):
    return service.end_session(owner_id, session_id)


@router.post("/{session_id}/cancel", summary="Cancel a session.", response_model=TrainingSessionResponse, )
def cancel_session(session_id: int, owner_id: int = Depends(get_current_owner_id),
                   service: SessionService = Depends(get_session_service), ):
    return service.cancel_session(owner_id, session_id)


@router.delete("/{session_id}", summary="Delete a session and its targets.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_session(session_id: int, owner_id: int = Depends(get_current_owner_id),
                   service: SessionService = Depends(get_session_service), ):
    service.delete_session(owner_id, session_id)


@router.get("/{session_id}/stats", summary="Get session statistics.", response_model=SessionStats, )
def get_session_stats(session_id: int, owner_id: int = Depends(get_current_owner_id),
                      service: SessionService = Depends(get_session_service), ):
    return service.get_session_stats(owner_id, session_id)


@router.get("/{session_id}/score", summary="Get the drill score of a session.", response_model=ScoreResponse, )
def get_score(session_id: int, owner_id: int = Depends(get_current_owner_id),
              service: SessionService = Depends(get_session_service), ):
    return service.get_score(owner_id, session_id)


@router.get("/{session_id}/progress", summary="Get progress against the session's drill.",
            response_model=Optional[DrillProgress], )
def get_drill_progress(session_id: int, owner_id: int = Depends(get_current_owner_id),
                       service: SessionService = Depends(get_session_service), ):
    return service.get_drill_progress(owner_id, session_id)


@router.get("/{session_id}/completion", summary="Get the drill completion recorded for a session.",
            response_model=Optional[DrillCompletionResponse], )
def get_completion(session_id: int, owner_id: int = Depends(get_current_owner_id),
                   service: SessionService = Depends(get_session_service), ):
    return service.get_completion(owner_id, session_id)


@router.post("/{session_id}/watch", summary="Record shots from a paired watch.",
             response_model=TrainingSessionResponse, )
def record_watch_data(session_id: int, data: WatchSessionData, owner_id: int = Depends(get_current_owner_id),
                      service: SessionService = Depends(get_session_service), ):
    return service.record_watch_data(owner_id, session_id, data)


# ----------------------------------------------------------------------
# Targets of a session
# ----------------------------------------------------------------------


@router.post("/{session_id}/targets", summary="Append a target.", response_model=SessionTargetResponse,
             status_code=status.HTTP_201_CREATED, )
def append_target(session_id: int, data: SessionTargetCreate, owner_id: int = Depends(get_current_owner_id),
                  service: TargetService = Depends(get_target_service), ):
    return service.append_target(owner_id, session_id, data)


@router.get("/{session_id}/targets", summary="List targets with their results.",
            response_model=list[SessionTargetResponse], )
def list_targets(session_id: int, owner_id: int = Depends(get_current_owner_id),
                 service: TargetService = Depends(get_target_service), ):
    return service.list_targets(owner_id, session_id)


@router.post("/{session_id}/targets/paper", summary="Log a paper target with its result.",
             response_model=SessionTargetResponse, status_code=status.HTTP_201_CREATED, )
def log_paper_target(session_id: int, data: PaperTargetLog, owner_id: int = Depends(get_current_owner_id),
                     service: TargetService = Depends(get_target_service), ):
    """Rejected when it would exceed the drill's target or round limits."""
    return service.log_paper_target(owner_id, session_id, data)


@router.post("/{session_id}/targets/tactical", summary="Log a tactical target with its result.",
             response_model=SessionTargetResponse, status_code=status.HTTP_201_CREATED, )
def log_tactical_target(session_id: int, data: TacticalTargetLog, owner_id: int = Depends(get_current_owner_id),
                        service: TargetService = Depends(get_target_service), ):
    """Rejected when it would exceed the drill's target or round limits."""
    return service.log_tactical_target(owner_id, session_id, data)
