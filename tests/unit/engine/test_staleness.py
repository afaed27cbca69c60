"""Tests for session age thresholds."""

import datetime

import pytest

from app.engine.staleness import LifecycleConfig, is_session_stale, should_auto_cancel

NOW = datetime.datetime(2026, 3, 2, 12, 0, 0)


def _hours_ago(hours: float) -> datetime.datetime:
    return NOW - datetime.timedelta(hours=hours)


class TestAutoCancel:
    @pytest.mark.parametrize("age, expected", [
        (0, False),
        (23.9, False),
        (24, False),
        (24.01, True),
        (72, True),
    ])
    def test_default_threshold_is_strict(self, age, expected):
        assert should_auto_cancel(_hours_ago(age), NOW) is expected

    def test_custom_threshold(self):
        config = LifecycleConfig(auto_cancel_after_hours=1)
        assert should_auto_cancel(_hours_ago(1.5), NOW, config) is True

    def test_missing_start(self):
        assert should_auto_cancel(None, NOW) is False


class TestStaleHint:
    def test_stale_after_two_hours(self):
        assert is_session_stale(_hours_ago(1.9), NOW) is False
        assert is_session_stale(_hours_ago(2.1), NOW) is True

    def test_config_validation(self):
        with pytest.raises(ValueError):
            LifecycleConfig(auto_cancel_after_hours=0)
