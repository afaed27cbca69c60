"""
Session statistics aggregator.

Statistics are recomputed from the full, ordered target/result snapshot
on every read.  Targets and results are append-only, so a from-scratch
pass is always consistent; no running totals are kept anywhere.

Trust pools
-----------

Two pools of shots and hits are accumulated:

- the **total** pool counts every result and is used for display and
  scoring,
- the **manual** pool only counts manually reported results and is the
  only input to ``accuracy_pct``.

Scanned paper results enumerate every detected hole as a hit, so their
hit ratio is always close to 100% and says nothing about accuracy.
Their dispersion, however, is meaningful and is always aggregated.
Tactical results are always manual.

Because the manual pool is a subset of the total pool,
``total_shots_fired >= manual_shots_fired`` and
``total_hits >= manual_hits`` hold for every output.
"""

from __future__ import annotations

from typing import Iterable, Optional

from app.models.enums import TargetType
from app.schemas.stats import SessionStats
from app.schemas.target import SessionTargetResponse


class _RunningMeasure:
    """Running mean and minimum of an optional measurement."""

    def __init__(self) -> None:
        self.total = 0.0
        self.count = 0
        self.minimum: Optional[float] = None

    def add(self, value: Optional[float]) -> None:
        if value is None:
            return
        self.total += value
        self.count += 1
        if self.minimum is None or value < self.minimum:
            self.minimum = value

    @property
    def average(self) -> Optional[float]:
        # None, not 0: nothing was measured
        if self.count == 0:
            return None
        return round(self.total / self.count, 2)


def calculate_accuracy(hits: int, shots: int) -> float:
    if shots <= 0:
        return 0.0
    return round(hits / shots * 100, 2)


def calculate_session_stats(targets: Iterable[SessionTargetResponse]) -> SessionStats:
    """Aggregate a session's targets into :class:`SessionStats`.

    Targets without a result yet still count towards the target and
    type counts, nothing else.
    """
    target_count = 0
    paper_targets = 0
    tactical_targets = 0
    total_shots = 0
    total_hits = 0
    manual_shots = 0
    manual_hits = 0
    stages_cleared = 0
    dispersion = _RunningMeasure()
    engagement = _RunningMeasure()

    for target in targets:
        target_count += 1

        if target.target_type == TargetType.PAPER:
            paper_targets += 1
            result = target.paper_result
            if result is None:
                continue

            hits = result.hits_total or 0
            total_shots += result.bullets_fired
            total_hits += hits
            dispersion.add(result.dispersion_cm)

            if result.is_manual:
                manual_shots += result.bullets_fired
                manual_hits += hits

        elif target.target_type == TargetType.TACTICAL:
            tactical_targets += 1
            result = target.tactical_result
            if result is None:
                continue

            total_shots += result.bullets_fired
            total_hits += result.hits
            manual_shots += result.bullets_fired
            manual_hits += result.hits

            if result.is_stage_cleared:
                stages_cleared += 1
            engagement.add(result.time_seconds)

    return SessionStats(target_count=target_count, paper_targets=paper_targets, tactical_targets=tactical_targets,
                        total_shots_fired=total_shots, total_hits=total_hits, manual_shots_fired=manual_shots,
                        manual_hits=manual_hits, accuracy_pct=calculate_accuracy(manual_hits, manual_shots),
                        avg_dispersion_cm=dispersion.average, best_dispersion_cm=dispersion.minimum,
                        stages_cleared=stages_cleared, avg_engagement_time_sec=engagement.average,
                        fastest_engagement_time_sec=engagement.minimum, )
