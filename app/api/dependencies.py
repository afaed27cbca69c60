"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication and service wiring.
"""

from typing import Optional

from fastapi import Depends
from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import NotAuthenticated
from app.core.security import decode_access_token, oauth2_scheme
from app.db.session import get_db
from app.engine.staleness import LifecycleConfig
from app.services.session_service import SessionService
from app.services.target_service import TargetService
from app.services.training_orchestrator import DatabaseTrainingOrchestrator


def get_current_owner_id(token: Optional[str] = Depends(oauth2_scheme)) -> int:
    """Extract the owner id from the bearer token."""
    subject = decode_access_token(token)
    if not subject:
        raise NotAuthenticated("Invalid or expired token")
    try:
        return int(subject)
    except ValueError:
        raise NotAuthenticated("Token subject is not a valid owner id")


def get_lifecycle_config() -> LifecycleConfig:
    return LifecycleConfig(auto_cancel_after_hours=settings.AUTO_CANCEL_SESSION_HOURS,
                           stale_after_hours=settings.STALE_SESSION_HOURS, )


def get_session_service(db: Session = Depends(get_db),
                        config: LifecycleConfig = Depends(get_lifecycle_config), ) -> SessionService:
    return SessionService(db, orchestrator=DatabaseTrainingOrchestrator(db), config=config)


def get_target_service(db: Session = Depends(get_db)) -> TargetService:
    return TargetService(db)
