"""
Drill template repository.
"""

from typing import Optional

from app.db.repositories.base import BaseRepository
from app.models.drill_template import DrillTemplate


class DrillTemplateRepository(BaseRepository):
    """Repository for DrillTemplate database operations."""

    def create(self, template: DrillTemplate) -> DrillTemplate:
        return self._save(template)

    def get_by_id(self, template_id: int) -> Optional[DrillTemplate]:
        return self.session.get(DrillTemplate, template_id)
