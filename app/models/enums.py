"""
Model enums.

Columns store the enum *value* as a plain string.
"""

from enum import Enum


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionMode(str, Enum):
    SOLO = "solo"
    GROUP = "group"


class TargetType(str, Enum):
    PAPER = "paper"
    TACTICAL = "tactical"


class PaperType(str, Enum):
    ACHIEVEMENT = "achievement"
    GROUPING = "grouping"


class InputMethod(str, Enum):
    """Provenance of a paper result."""
    SCAN = "scan"
    MANUAL = "manual"


class DrillGoal(str, Enum):
    GROUPING = "grouping"
    ACHIEVEMENT = "achievement"


class ScoringMode(str, Enum):
    POINTS = "points"


class TrainingStatus(str, Enum):
    PLANNED = "planned"
    ONGOING = "ongoing"
    FINISHED = "finished"
    CANCELLED = "cancelled"
