"""
Drill source resolution.

A session may reference up to three drill origins.  Exactly one is
authoritative, chosen by priority:

1. the training drill instance (``drill_id``),
2. the drill template (``drill_template_id``),
3. the inline custom configuration.

A higher-priority source wins even when a lower one is also present.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from app.models.drill_template import DrillConfigColumns, DrillTemplate
from app.models.training import TrainingDrill
from app.schemas.drill import (CustomDrillConfigCreate, CustomDrillSource, DrillConfig, DrillSource,
                               DrillTemplateSource, TrainingDrillSource, )


def config_from_row(row: DrillConfigColumns) -> DrillConfig:
    """Normalize a drill instance or template row."""
    return DrillConfig.model_validate(row, from_attributes=True)


def parse_custom_config(data: Optional[dict[str, Any]]) -> Optional[CustomDrillConfigCreate]:
    """Parse a stored inline config.  Returns ``None`` if absent, malformed or unusable."""
    if not data:
        return None
    try:
        custom = CustomDrillConfigCreate.model_validate(data)
    except PydanticValidationError:
        return None
    return custom if custom.is_usable else None


def config_from_custom(custom: CustomDrillConfigCreate) -> DrillConfig:
    return DrillConfig(id=None, name=custom.name or "Quick Practice", drill_goal=custom.drill_goal,
                       target_type=custom.target_type, distance_m=custom.distance_m,
                       rounds_per_shooter=custom.rounds_per_shooter, time_limit_seconds=custom.time_limit_seconds,
                       strings_count=custom.strings_count, )


def resolve_drill_source(training_drill: Optional[TrainingDrill] = None,
                         drill_template: Optional[DrillTemplate] = None,
                         custom_config: Optional[dict[str, Any]] = None, ) -> Optional[DrillSource]:
    """Pick the authoritative drill source, or ``None`` if there is none."""
    if training_drill is not None:
        return TrainingDrillSource(drill_id=training_drill.id, training_id=training_drill.training_id,
                                   config=config_from_row(training_drill), )
    if drill_template is not None:
        return DrillTemplateSource(drill_template_id=drill_template.id, config=config_from_row(drill_template), )

    custom = parse_custom_config(custom_config)
    if custom is not None:
        return CustomDrillSource(config=config_from_custom(custom))
    return None
