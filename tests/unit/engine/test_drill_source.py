"""Tests for drill source resolution."""

from app.engine.drill_source import parse_custom_config, resolve_drill_source
from app.models.drill_template import DrillTemplate
from app.models.enums import DrillGoal, TargetType
from app.models.training import TrainingDrill


def _make_training_drill(**overrides) -> TrainingDrill:
    defaults = {
        "id": 11,
        "training_id": 3,
        "name": "El Presidente",
        "target_type": "tactical",
        "distance_m": 10.0,
        "rounds_per_shooter": 6,
        "strings_count": 2,
    }
    defaults.update(overrides)
    return TrainingDrill(**defaults)


def _make_template(**overrides) -> DrillTemplate:
    defaults = {
        "id": 21,
        "name": "5x5 grouping",
        "drill_goal": "grouping",
        "target_type": "paper",
        "distance_m": 25.0,
        "rounds_per_shooter": 5,
    }
    defaults.update(overrides)
    return DrillTemplate(**defaults)


CUSTOM = {"name": "Warm-up", "distance_m": 15, "rounds_per_shooter": 10}


class TestResolveDrillSource:
    def test_nothing_to_resolve(self):
        assert resolve_drill_source() is None

    def test_training_drill_wins(self):
        source = resolve_drill_source(_make_training_drill(), _make_template(), CUSTOM)
        assert source.kind == "training_drill"
        assert source.drill_id == 11
        assert source.training_id == 3
        assert source.config.name == "El Presidente"
        assert source.config.target_type == TargetType.TACTICAL

    def test_template_beats_custom(self):
        source = resolve_drill_source(None, _make_template(), CUSTOM)
        assert source.kind == "drill_template"
        assert source.drill_template_id == 21
        assert source.config.drill_goal == DrillGoal.GROUPING

    def test_custom_config(self):
        source = resolve_drill_source(custom_config=CUSTOM)
        assert source.kind == "custom"
        assert source.config.id is None
        assert source.config.name == "Warm-up"
        assert source.config.target_type == TargetType.PAPER
        assert source.config.rounds_per_shooter == 10


class TestParseCustomConfig:
    def test_defaults(self):
        custom = parse_custom_config({"distance_m": 10, "rounds_per_shooter": 5})
        assert custom.name == "Quick Practice"
        assert custom.drill_goal == DrillGoal.GROUPING
        assert custom.target_type == TargetType.PAPER

    def test_unusable_config(self):
        assert parse_custom_config({"distance_m": 0, "rounds_per_shooter": 5}) is None
        assert parse_custom_config({"distance_m": 10, "rounds_per_shooter": 0}) is None

    def test_malformed_config(self):
        assert parse_custom_config({"distance_m": "far"}) is None

    def test_empty(self):
        assert parse_custom_config(None) is None
        assert parse_custom_config({}) is None
