"""Tests for drill requirements, live progress and the drill contract for new targets."""

import pytest

from app.core.exceptions import DrillLimitExceeded
from app.engine.requirements import check_drill_limits, compute_drill_progress, get_drill_requirements
from app.models.drill_template import INFINITE_SHOTS_SENTINEL
from app.models.enums import TargetType
from app.schemas.drill import DrillConfig
from app.schemas.stats import SessionStats


# ======================================================================
# Helpers
# ======================================================================


def _make_drill(**overrides) -> DrillConfig:
    defaults = {
        "name": "Bill drill",
        "target_type": TargetType.TACTICAL,
        "distance_m": 7.0,
        "rounds_per_shooter": 6,
        "strings_count": 3,
    }
    defaults.update(overrides)
    return DrillConfig(**defaults)


def _make_stats(targets: int = 0, shots: int = 0, hits: int = 0, accuracy: float = 0.0) -> SessionStats:
    return SessionStats(target_count=targets, total_shots_fired=shots, total_hits=hits, manual_shots_fired=shots,
                        manual_hits=hits, accuracy_pct=accuracy, )


# ======================================================================
# get_drill_requirements
# ======================================================================


class TestDrillRequirements:
    def test_tactical_drill(self):
        req = get_drill_requirements(_make_drill(rounds_per_shooter=6, strings_count=3))
        assert req.rounds == 3
        assert req.required_targets == 3
        assert req.required_shots == 18
        assert req.is_paper is False
        assert req.bullets_per_round == 6

    @pytest.mark.parametrize("rounds_per_shooter", [1, 10, INFINITE_SHOTS_SENTINEL])
    def test_paper_drill_has_no_shot_quota(self, rounds_per_shooter):
        req = get_drill_requirements(_make_drill(target_type=TargetType.PAPER,
                                                 rounds_per_shooter=rounds_per_shooter))
        assert req.required_shots == 0
        assert req.is_paper is True

    @pytest.mark.parametrize("strings_count", [None, 0, -2])
    def test_missing_strings_count_means_one_round(self, strings_count):
        req = get_drill_requirements(_make_drill(strings_count=strings_count))
        assert req.rounds == 1
        assert req.required_targets == 1
        assert req.required_shots == 6

    def test_target_count_does_not_change_required_targets(self):
        req = get_drill_requirements(_make_drill(strings_count=2, target_count=5))
        assert req.required_targets == 2


# ======================================================================
# compute_drill_progress
# ======================================================================


class TestDrillProgress:
    def test_fresh_session(self):
        progress = compute_drill_progress(_make_drill(), _make_stats(), elapsed_seconds=0)
        assert progress.shots_progress == 0
        assert progress.targets_progress == 0
        assert progress.is_complete is False
        assert progress.limit_reached is False
        assert progress.next_target.next_bullets == 6

    def test_partial_tactical_progress(self):
        progress = compute_drill_progress(_make_drill(), _make_stats(targets=1, shots=6, hits=5), 30)
        assert progress.shots_progress == 33
        assert progress.targets_progress == 33
        assert progress.next_target.remaining_shots == 12
        assert progress.next_target.remaining_targets == 2

    def test_last_entry_takes_remaining_shots(self):
        progress = compute_drill_progress(_make_drill(), _make_stats(targets=2, shots=10), 30)
        assert progress.next_target.remaining_targets == 1
        assert progress.next_target.next_bullets == 8

    def test_complete_tactical_drill(self):
        progress = compute_drill_progress(_make_drill(), _make_stats(targets=3, shots=18, hits=15), 60)
        assert progress.is_complete is True
        assert progress.limit_reached is True
        assert progress.shots_progress == 100
        assert progress.targets_progress == 100

    def test_progress_is_capped_at_100(self):
        progress = compute_drill_progress(_make_drill(strings_count=1), _make_stats(targets=4, shots=30), 60)
        assert progress.shots_progress == 100
        assert progress.targets_progress == 100

    def test_paper_drill_completes_on_targets_only(self):
        drill = _make_drill(target_type=TargetType.PAPER, strings_count=2)
        progress = compute_drill_progress(drill, _make_stats(targets=2, shots=0), 10)
        assert progress.is_complete is True
        assert progress.shots_progress == 0
        assert progress.next_target.next_bullets == 0

    def test_time_limit(self):
        drill = _make_drill(time_limit_seconds=60)
        assert compute_drill_progress(drill, _make_stats(), 60).over_time is False
        assert compute_drill_progress(drill, _make_stats(), 61).over_time is True
        assert compute_drill_progress(drill, _make_stats(), 61).meets_time is False

    def test_accuracy_threshold(self):
        drill = _make_drill(min_accuracy_percent=80)
        assert compute_drill_progress(drill, _make_stats(accuracy=79.99), 0).meets_accuracy is False
        assert compute_drill_progress(drill, _make_stats(accuracy=80.0), 0).meets_accuracy is True

    def test_no_accuracy_threshold_always_meets(self):
        progress = compute_drill_progress(_make_drill(min_accuracy_percent=None), _make_stats(accuracy=0.0), 0)
        assert progress.meets_accuracy is True


# ======================================================================
# check_drill_limits
# ======================================================================


class TestDrillLimits:
    def test_accepts_expected_bullets(self):
        check_drill_limits(_make_drill(), _make_stats(), TargetType.TACTICAL, bullets_fired=6)

    def test_rejects_wrong_target_type(self):
        with pytest.raises(DrillLimitExceeded, match="requires tactical targets"):
            check_drill_limits(_make_drill(), _make_stats(), TargetType.PAPER)

    def test_rejects_target_over_quota(self):
        with pytest.raises(DrillLimitExceeded, match=r"Target limit reached \(3\)"):
            check_drill_limits(_make_drill(), _make_stats(targets=3, shots=12), TargetType.TACTICAL, 6)

    def test_rejects_when_rounds_are_used_up(self):
        with pytest.raises(DrillLimitExceeded, match=r"Round limit reached \(18\)"):
            check_drill_limits(_make_drill(), _make_stats(targets=2, shots=18), TargetType.TACTICAL, 6)

    def test_rejects_more_bullets_than_remaining(self):
        with pytest.raises(DrillLimitExceeded, match="Remaining: 6"):
            check_drill_limits(_make_drill(), _make_stats(targets=2, shots=12), TargetType.TACTICAL, 7)

    def test_rejects_unexpected_bullet_count(self):
        with pytest.raises(DrillLimitExceeded, match="expects 6 bullets"):
            check_drill_limits(_make_drill(), _make_stats(), TargetType.TACTICAL, 4)

    def test_paper_bullets_are_not_capped(self):
        drill = _make_drill(target_type=TargetType.PAPER, rounds_per_shooter=5, strings_count=1)
        check_drill_limits(drill, _make_stats(), TargetType.PAPER, bullets_fired=40)

    def test_paper_target_quota_still_applies(self):
        drill = _make_drill(target_type=TargetType.PAPER, strings_count=1)
        with pytest.raises(DrillLimitExceeded, match="Target limit"):
            check_drill_limits(drill, _make_stats(targets=1), TargetType.PAPER, bullets_fired=5)
