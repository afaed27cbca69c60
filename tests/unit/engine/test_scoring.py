"""Tests for drill scoring."""

import pytest

from app.engine.scoring import calculate_points_score, calculate_score
from app.models.enums import TargetType
from app.schemas.drill import DrillConfig
from app.schemas.stats import SessionStats


def _make_drill(**overrides) -> DrillConfig:
    defaults = {
        "name": "Points drill",
        "target_type": TargetType.TACTICAL,
        "distance_m": 10.0,
        "rounds_per_shooter": 10,
        "scoring_mode": "points",
        "points_per_hit": 10,
        "penalty_per_miss": 5,
    }
    defaults.update(overrides)
    return DrillConfig(**defaults)


class TestPointsScore:
    @pytest.mark.parametrize("hits, shots, per_hit, penalty, expected", [
        (8, 10, 10, 5, 70),
        (10, 10, 10, 5, 100),
        (0, 4, 10, 5, -20),
        (0, 0, 10, 5, 0),
        (3, 2, 1, 1, 3),
    ])
    def test_formula(self, hits, shots, per_hit, penalty, expected):
        assert calculate_points_score(hits, shots, per_hit, penalty) == expected


class TestCalculateScore:
    def test_points_drill(self):
        stats = SessionStats(total_shots_fired=10, total_hits=8)
        assert calculate_score(_make_drill(), stats) == 70

    def test_unscored_drill(self):
        stats = SessionStats(total_shots_fired=10, total_hits=8)
        assert calculate_score(_make_drill(scoring_mode=None), stats) is None

    def test_unknown_scoring_mode(self):
        stats = SessionStats(total_shots_fired=10, total_hits=8)
        assert calculate_score(_make_drill(scoring_mode="time"), stats) is None

    def test_no_drill(self):
        assert calculate_score(None, SessionStats()) is None

    def test_missing_point_values_count_as_zero(self):
        stats = SessionStats(total_shots_fired=10, total_hits=8)
        drill = _make_drill(points_per_hit=None, penalty_per_miss=None)
        assert calculate_score(drill, stats) == 0
