"""
Drill requirement resolver.

Turns a drill's declarative configuration into concrete numbers:

- ``rounds``: ``strings_count`` if positive, otherwise 1,
- ``required_targets``: one target entry per round,
- ``required_shots``: ``rounds_per_shooter * rounds`` for tactical drills,
  0 for paper drills.

Paper drills are graded on grouping and accuracy from scans, which do
not expose a reliable "shots fired" count, so they carry no shot quota.

The same numbers drive live progress reporting and the drill contract
enforced when a target is logged.
"""

from __future__ import annotations

from typing import Optional

from app.core.exceptions import DrillLimitExceeded
from app.models.enums import TargetType
from app.schemas.drill import DrillConfig, DrillProgress, DrillRequirements, NextTargetPlan
from app.schemas.stats import SessionStats


def get_drill_requirements(drill: DrillConfig) -> DrillRequirements:
    rounds = drill.strings_count if drill.strings_count and drill.strings_count > 0 else 1
    is_paper = drill.target_type == TargetType.PAPER
    required_shots = 0 if is_paper else drill.rounds_per_shooter * rounds
    return DrillRequirements(rounds=rounds, required_targets=rounds, required_shots=required_shots,
                             is_paper=is_paper, bullets_per_round=drill.rounds_per_shooter, )


# ======================================================================
# Progress
# ======================================================================


def _percent(done: int, required: int) -> int:
    if required <= 0:
        return 0
    return min(100, round(done / required * 100))


def _next_target_plan(req: DrillRequirements, stats: SessionStats) -> NextTargetPlan:
    remaining_targets = max(0, req.required_targets - stats.target_count)
    if req.is_paper:
        return NextTargetPlan(remaining_shots=0, remaining_targets=remaining_targets, next_bullets=0)

    remaining_shots = max(0, req.required_shots - stats.total_shots_fired)
    if remaining_shots <= 0 or remaining_targets <= 0:
        return NextTargetPlan(remaining_shots=remaining_shots, remaining_targets=remaining_targets, next_bullets=0)

    # The last entry takes whatever is left
    if remaining_targets == 1:
        next_bullets = remaining_shots
    else:
        next_bullets = min(remaining_shots, req.bullets_per_round)
    return NextTargetPlan(remaining_shots=remaining_shots, remaining_targets=remaining_targets,
                          next_bullets=next_bullets, )


def compute_drill_progress(drill: DrillConfig, stats: SessionStats, elapsed_seconds: float) -> DrillProgress:
    """Progress of a live session against its drill."""
    req = get_drill_requirements(drill)

    shots_progress = 0 if req.is_paper else _percent(stats.total_shots_fired, req.required_shots)
    targets_progress = _percent(stats.target_count, req.required_targets)

    if req.is_paper:
        is_complete = stats.target_count >= req.required_targets
    else:
        is_complete = (stats.total_shots_fired >= req.required_shots
                       and stats.target_count >= req.required_targets)

    meets_accuracy = not drill.min_accuracy_percent or stats.accuracy_pct >= drill.min_accuracy_percent
    over_time = bool(drill.time_limit_seconds) and elapsed_seconds > drill.time_limit_seconds

    plan = _next_target_plan(req, stats)
    if req.is_paper:
        limit_reached = plan.remaining_targets <= 0
    else:
        limit_reached = plan.remaining_shots <= 0 or plan.remaining_targets <= 0

    return DrillProgress(requirements=req, shots_progress=shots_progress, targets_progress=targets_progress,
                         is_complete=is_complete, meets_accuracy=meets_accuracy, meets_time=not over_time,
                         over_time=over_time, limit_reached=limit_reached, next_target=plan, )


# ======================================================================
# Drill contract for new targets
# ======================================================================


def check_drill_limits(drill: DrillConfig, stats: SessionStats, target_type: TargetType,
                       bullets_fired: Optional[int] = None, ) -> None:
    """Reject a new target that would break the drill contract.

    Paper bullet counts come from scan detection and may exceed any
    configured cap, so paper targets are only checked for type and
    target quota.  Tactical targets must match the expected bullet count
    of the next entry exactly.

    Raises:
        DrillLimitExceeded: with a message naming the violated limit.
    """
    if drill.target_type != target_type:
        raise DrillLimitExceeded(f"This drill requires {drill.target_type.value} targets.")

    req = get_drill_requirements(drill)
    remaining_targets = req.required_targets - stats.target_count
    if remaining_targets <= 0:
        raise DrillLimitExceeded(f"Target limit reached ({req.required_targets}).")

    if req.is_paper:
        return

    remaining_shots = req.required_shots - stats.total_shots_fired
    if remaining_shots <= 0:
        raise DrillLimitExceeded(f"Round limit reached ({req.required_shots}).")

    if bullets_fired is None:
        return

    if bullets_fired > remaining_shots:
        raise DrillLimitExceeded(f"This target exceeds remaining rounds. Remaining: {remaining_shots}.")

    expected_next = remaining_shots if remaining_targets == 1 else req.bullets_per_round
    if bullets_fired != expected_next:
        raise DrillLimitExceeded(f"This drill expects {expected_next} bullets for the next round.")
