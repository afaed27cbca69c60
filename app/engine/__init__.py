"""Session engine core — drill requirements, stats, scoring, completion gates."""

from app.engine.completion import evaluate_drill_completion
from app.engine.requirements import get_drill_requirements
from app.engine.scoring import calculate_score
from app.engine.stats import calculate_session_stats

__all__ = ["calculate_score", "calculate_session_stats", "evaluate_drill_completion", "get_drill_requirements"]
