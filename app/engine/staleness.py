"""
Session staleness policy.

Staleness is evaluated opportunistically, when the owner next creates a
session; there is no periodic sweep.  An active session older than
``auto_cancel_after_hours`` is treated as abandoned app state and is
cancelled instead of completed.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LifecycleConfig(BaseModel):
    """Thresholds for the session lifecycle."""

    auto_cancel_after_hours: float = Field(24.0, gt=0)
    stale_after_hours: float = Field(2.0, gt=0, description="Display hint only")


DEFAULT_LIFECYCLE_CONFIG = LifecycleConfig()


def session_age_hours(started_at: datetime.datetime, now: datetime.datetime) -> float:
    return (now - started_at).total_seconds() / 3600.0


def should_auto_cancel(started_at: Optional[datetime.datetime], now: datetime.datetime,
                       config: Optional[LifecycleConfig] = None, ) -> bool:
    """Strictly older than the auto-cancel threshold."""
    if started_at is None:
        return False
    cfg = config or DEFAULT_LIFECYCLE_CONFIG
    return session_age_hours(started_at, now) > cfg.auto_cancel_after_hours


def is_session_stale(started_at: Optional[datetime.datetime], now: datetime.datetime,
                     config: Optional[LifecycleConfig] = None, ) -> bool:
    if started_at is None:
        return False
    cfg = config or DEFAULT_LIFECYCLE_CONFIG
    return session_age_hours(started_at, now) > cfg.stale_after_hours
