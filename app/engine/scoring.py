"""
Drill scoring.

Only the ``points`` mode is defined::

    score = hits * points_per_hit - max(0, shots - hits) * penalty_per_miss

computed on the **total** pool: scoring rewards the overall engagement
outcome regardless of how each result was reported.
"""

from __future__ import annotations

from typing import Optional

from app.models.enums import ScoringMode
from app.schemas.drill import DrillConfig
from app.schemas.stats import SessionStats


def calculate_points_score(hits: int, shots: int, points_per_hit: float, penalty_per_miss: float) -> float:
    misses = max(0, shots - hits)
    return hits * points_per_hit - misses * penalty_per_miss


def calculate_score(drill: Optional[DrillConfig], stats: SessionStats) -> Optional[float]:
    """Return the drill score, or ``None`` when the drill is not scored."""
    if drill is None or not drill.scoring_mode:
        return None
    if drill.scoring_mode != ScoringMode.POINTS:
        return None
    return calculate_points_score(hits=stats.total_hits, shots=stats.total_shots_fired,
                                  points_per_hit=drill.points_per_hit or 0.0,
                                  penalty_per_miss=drill.penalty_per_miss or 0.0, )
