"""Tests for the session statistics aggregator.

Pure unit tests: targets are built as response schemas, no database.
"""

import pytest

from app.engine.stats import calculate_accuracy, calculate_session_stats
from app.models.enums import InputMethod, TargetType
from app.schemas.target import PaperResultResponse, SessionTargetResponse, TacticalResultResponse


# ======================================================================
# Helpers
# ======================================================================


def _make_paper(sequence: int, bullets: int, hits: int, method: InputMethod = InputMethod.MANUAL,
                dispersion: float | None = None, ) -> SessionTargetResponse:
    return SessionTargetResponse(
        target_type=TargetType.PAPER,
        sequence_in_session=sequence,
        paper_result=PaperResultResponse(bullets_fired=bullets, hits_total=hits, input_method=method,
                                         dispersion_cm=dispersion, ),
    )


def _make_tactical(sequence: int, bullets: int, hits: int, cleared: bool = False,
                   time_seconds: float | None = None, ) -> SessionTargetResponse:
    return SessionTargetResponse(
        target_type=TargetType.TACTICAL,
        sequence_in_session=sequence,
        tactical_result=TacticalResultResponse(bullets_fired=bullets, hits=hits, is_stage_cleared=cleared,
                                               time_seconds=time_seconds, ),
    )


# ======================================================================
# calculate_accuracy
# ======================================================================


class TestAccuracy:
    @pytest.mark.parametrize("hits, shots, expected", [
        (0, 0, 0.0),
        (2, 5, 40.0),
        (15, 18, 83.33),
        (1, 3, 33.33),
        (5, 5, 100.0),
    ])
    def test_rounding(self, hits, shots, expected):
        assert calculate_accuracy(hits, shots) == expected


# ======================================================================
# calculate_session_stats
# ======================================================================


class TestSessionStats:
    def test_empty_session(self):
        stats = calculate_session_stats([])
        assert stats.target_count == 0
        assert stats.total_shots_fired == 0
        assert stats.accuracy_pct == 0.0
        assert stats.avg_dispersion_cm is None
        assert stats.fastest_engagement_time_sec is None

    def test_scanned_results_are_excluded_from_accuracy(self):
        targets = [
            _make_paper(1, bullets=10, hits=10, method=InputMethod.SCAN),
            _make_tactical(2, bullets=5, hits=2),
        ]
        stats = calculate_session_stats(targets)
        assert stats.total_shots_fired == 15
        assert stats.total_hits == 12
        assert stats.manual_shots_fired == 5
        assert stats.manual_hits == 2
        assert stats.accuracy_pct == 40.0

    def test_only_scanned_results_give_zero_accuracy(self):
        stats = calculate_session_stats([_make_paper(1, 10, 9, method=InputMethod.SCAN)])
        assert stats.total_hits == 9
        assert stats.accuracy_pct == 0.0

    def test_manual_paper_counts_towards_accuracy(self):
        stats = calculate_session_stats([_make_paper(1, 10, 7)])
        assert stats.accuracy_pct == 70.0

    def test_dispersion_uses_scanned_and_manual_results(self):
        targets = [
            _make_paper(1, 5, 5, method=InputMethod.SCAN, dispersion=4.0),
            _make_paper(2, 5, 4, dispersion=3.0),
            _make_paper(3, 5, 4),
        ]
        stats = calculate_session_stats(targets)
        assert stats.avg_dispersion_cm == 3.5
        assert stats.best_dispersion_cm == 3.0

    def test_tactical_times_and_stages(self):
        targets = [
            _make_tactical(1, 6, 5, cleared=True, time_seconds=4.2),
            _make_tactical(2, 6, 6, cleared=False, time_seconds=3.1),
            _make_tactical(3, 6, 4, cleared=True),
        ]
        stats = calculate_session_stats(targets)
        assert stats.stages_cleared == 2
        assert stats.avg_engagement_time_sec == 3.65
        assert stats.fastest_engagement_time_sec == 3.1

    def test_target_without_result_only_counts_as_target(self):
        targets = [
            SessionTargetResponse(target_type=TargetType.TACTICAL, sequence_in_session=1),
            _make_paper(2, 5, 5),
        ]
        stats = calculate_session_stats(targets)
        assert stats.target_count == 2
        assert stats.tactical_targets == 1
        assert stats.paper_targets == 1
        assert stats.total_shots_fired == 5

    def test_paper_without_hit_count(self):
        target = SessionTargetResponse(target_type=TargetType.PAPER, sequence_in_session=1,
                                       paper_result=PaperResultResponse(bullets_fired=5), )
        stats = calculate_session_stats([target])
        assert stats.total_shots_fired == 5
        assert stats.total_hits == 0

    def test_end_to_end_tactical_drill(self):
        stats = calculate_session_stats([_make_tactical(i, 6, 5) for i in range(1, 4)])
        assert stats.total_shots_fired == 18
        assert stats.total_hits == 15
        assert stats.accuracy_pct == 83.33

    def test_manual_pool_never_exceeds_total_pool(self):
        targets = [
            _make_paper(1, 10, 10, method=InputMethod.SCAN),
            _make_paper(2, 8, 6),
            _make_tactical(3, 4, 1),
        ]
        stats = calculate_session_stats(targets)
        assert stats.total_shots_fired >= stats.manual_shots_fired
        assert stats.total_hits >= stats.manual_hits
