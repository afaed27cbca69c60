"""
Drill completion evaluator.

A drill counts as completed only when four independent gates pass:

1. shot count: paper drills pass trivially, tactical drills need
   ``total_shots_fired >= required_shots``,
2. target count: ``target_count >= required_targets``,
3. accuracy: passes when no minimum is declared, otherwise
   ``accuracy_pct >= min_accuracy_percent``,
4. time: passes when no limit is declared, otherwise the session's
   wall-clock duration (``ended_at - started_at``) must not exceed it.

The time gate never looks at per-target engagement times; those are a
display statistic.
"""

from __future__ import annotations

import datetime
import math

from app.engine.requirements import get_drill_requirements
from app.schemas.completion import CompletionEvaluation
from app.schemas.drill import DrillConfig
from app.schemas.stats import SessionStats


def session_duration_seconds(started_at: datetime.datetime, ended_at: datetime.datetime) -> int:
    return max(0, math.floor((ended_at - started_at).total_seconds()))


def evaluate_drill_completion(drill: DrillConfig, stats: SessionStats, started_at: datetime.datetime,
                              ended_at: datetime.datetime, ) -> CompletionEvaluation:
    req = get_drill_requirements(drill)
    duration = session_duration_seconds(started_at, ended_at)

    meets_shot_count = True if req.is_paper else stats.total_shots_fired >= req.required_shots
    meets_target_count = stats.target_count >= req.required_targets
    meets_accuracy = not drill.min_accuracy_percent or stats.accuracy_pct >= drill.min_accuracy_percent
    meets_time = not drill.time_limit_seconds or duration <= drill.time_limit_seconds

    return CompletionEvaluation(requirements=req, meets_shot_count=meets_shot_count,
                                meets_target_count=meets_target_count, meets_accuracy=meets_accuracy,
                                meets_time=meets_time, duration_seconds=duration, )
