"""Tests for the four drill completion gates."""

import datetime

import pytest

from app.engine.completion import evaluate_drill_completion, session_duration_seconds
from app.models.enums import TargetType
from app.schemas.drill import DrillConfig
from app.schemas.stats import SessionStats

STARTED = datetime.datetime(2026, 3, 1, 10, 0, 0)


def _make_drill(**overrides) -> DrillConfig:
    defaults = {
        "name": "Qualification",
        "target_type": TargetType.TACTICAL,
        "distance_m": 15.0,
        "rounds_per_shooter": 6,
        "strings_count": 3,
    }
    defaults.update(overrides)
    return DrillConfig(**defaults)


def _make_stats(targets: int = 3, shots: int = 18, hits: int = 15, accuracy: float = 83.33) -> SessionStats:
    return SessionStats(target_count=targets, total_shots_fired=shots, total_hits=hits, manual_shots_fired=shots,
                        manual_hits=hits, accuracy_pct=accuracy, )


def _ended(seconds: float) -> datetime.datetime:
    return STARTED + datetime.timedelta(seconds=seconds)


class TestSessionDuration:
    @pytest.mark.parametrize("seconds, expected", [(0, 0), (59.9, 59), (60, 60), (-5, 0)])
    def test_floor_and_clamp(self, seconds, expected):
        assert session_duration_seconds(STARTED, _ended(seconds)) == expected


class TestEvaluateDrillCompletion:
    def test_all_gates_pass(self):
        evaluation = evaluate_drill_completion(_make_drill(), _make_stats(), STARTED, _ended(120))
        assert evaluation.passed is True
        assert evaluation.failed_gates == []
        assert evaluation.duration_seconds == 120

    def test_shot_gate(self):
        evaluation = evaluate_drill_completion(_make_drill(), _make_stats(shots=17), STARTED, _ended(10))
        assert evaluation.meets_shot_count is False
        assert evaluation.failed_gates == ["shot_count"]

    def test_target_gate(self):
        evaluation = evaluate_drill_completion(_make_drill(), _make_stats(targets=2), STARTED, _ended(10))
        assert evaluation.meets_target_count is False
        assert evaluation.passed is False

    def test_accuracy_gate_alone_fails(self):
        drill = _make_drill(min_accuracy_percent=90)
        evaluation = evaluate_drill_completion(drill, _make_stats(), STARTED, _ended(10))
        assert evaluation.meets_shot_count is True
        assert evaluation.meets_target_count is True
        assert evaluation.meets_time is True
        assert evaluation.meets_accuracy is False
        assert evaluation.failed_gates == ["accuracy"]

    def test_time_gate_is_inclusive(self):
        drill = _make_drill(time_limit_seconds=60)
        assert evaluate_drill_completion(drill, _make_stats(), STARTED, _ended(60.5)).meets_time is True
        assert evaluate_drill_completion(drill, _make_stats(), STARTED, _ended(61)).meets_time is False

    @pytest.mark.parametrize("limit", [None, 0])
    def test_unset_limits_always_pass(self, limit):
        drill = _make_drill(min_accuracy_percent=limit, time_limit_seconds=limit)
        evaluation = evaluate_drill_completion(drill, _make_stats(accuracy=0.0), STARTED, _ended(86400))
        assert evaluation.meets_accuracy is True
        assert evaluation.meets_time is True

    def test_paper_drill_ignores_shot_count(self):
        drill = _make_drill(target_type=TargetType.PAPER, strings_count=1)
        evaluation = evaluate_drill_completion(drill, _make_stats(targets=1, shots=0, hits=0, accuracy=0.0),
                                               STARTED, _ended(30))
        assert evaluation.meets_shot_count is True
        assert evaluation.passed is True
