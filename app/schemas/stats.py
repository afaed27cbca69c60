"""
Session statistics schemas.

Statistics are derived on every read from the session's targets and
results; they are never stored as their own row.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SessionStats(BaseModel):
    """Aggregated statistics of one session.

    ``total_*`` counts every result (for display); ``manual_*`` only
    counts manually reported results and is the pool accuracy is
    computed from.
    """

    target_count: int = 0
    paper_targets: int = 0
    tactical_targets: int = 0

    total_shots_fired: int = 0
    total_hits: int = 0
    manual_shots_fired: int = 0
    manual_hits: int = 0
    accuracy_pct: float = Field(0.0, description="Manual hits / manual shots, in percent")

    avg_dispersion_cm: Optional[float] = None
    best_dispersion_cm: Optional[float] = None

    stages_cleared: int = 0
    avg_engagement_time_sec: Optional[float] = None
    fastest_engagement_time_sec: Optional[float] = None


class ScoreResponse(BaseModel):
    session_id: int
    scoring_mode: Optional[str] = None
    score: Optional[float] = Field(None, description="None when the drill has no scoring mode")
