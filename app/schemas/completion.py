"""
Drill completion schemas.
"""

import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.schemas.drill import DrillRequirements


class CompletionEvaluation(BaseModel):
    """Outcome of the four completion gates for one session."""

    requirements: DrillRequirements
    meets_shot_count: bool
    meets_target_count: bool
    meets_accuracy: bool
    meets_time: bool
    duration_seconds: int = Field(..., ge=0, description="Wall-clock session duration")

    @property
    def passed(self) -> bool:
        return self.meets_shot_count and self.meets_target_count and self.meets_accuracy and self.meets_time

    @property
    def failed_gates(self) -> list[str]:
        gates = {"shot_count": self.meets_shot_count, "target_count": self.meets_target_count,
                 "accuracy": self.meets_accuracy, "time": self.meets_time, }
        return [name for name, ok in gates.items() if not ok]


class DrillCompletionResponse(BaseModel):
    id: int
    user_id: int
    training_id: int
    drill_id: int
    session_id: int
    completed_at: datetime.datetime
    shots_fired: int
    hits: int
    accuracy_pct: float
    time_seconds: Optional[float]
    stats_snapshot: dict[str, Any]

    class Config:
        from_attributes = True
