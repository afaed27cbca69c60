"""
Session target repository.

Targets and their results are append-only: this repository only creates
and reads them.
"""

from typing import Optional, TypeVar, Union

from sqlalchemy import func
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.models.target import PaperTargetResult, SessionTarget, TacticalTargetResult

TargetRow = tuple[SessionTarget, Optional[PaperTargetResult], Optional[TacticalTargetResult]]
ResultT = TypeVar("ResultT", bound=Union[PaperTargetResult, TacticalTargetResult])


class SessionTargetRepository(BaseRepository):
    """Repository for targets and target results."""

    def create(self, target: SessionTarget) -> SessionTarget:
        return self._save(target)

    def get_by_id(self, target_id: int) -> Optional[SessionTarget]:
        return self.session.get(SessionTarget, target_id)

    def count_by_session(self, session_id: int) -> int:
        statement = select(func.count()).select_from(SessionTarget).where(SessionTarget.session_id == session_id)
        return self.session.exec(statement).first() or 0

    def get_with_results(self, session_id: int) -> list[TargetRow]:
        """All targets of a session ordered by sequence, each with its result (if any)."""
        statement = (select(SessionTarget, PaperTargetResult, TacticalTargetResult)
                     .outerjoin(PaperTargetResult, PaperTargetResult.session_target_id == SessionTarget.id)
                     .outerjoin(TacticalTargetResult, TacticalTargetResult.session_target_id == SessionTarget.id)
                     .where(SessionTarget.session_id == session_id)
                     .order_by(SessionTarget.sequence_in_session, SessionTarget.id))
        return [(row[0], row[1], row[2]) for row in self.session.exec(statement).all()]

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def get_paper_result(self, target_id: int) -> Optional[PaperTargetResult]:
        statement = select(PaperTargetResult).where(PaperTargetResult.session_target_id == target_id)
        return self.session.exec(statement).first()

    def get_tactical_result(self, target_id: int) -> Optional[TacticalTargetResult]:
        statement = select(TacticalTargetResult).where(TacticalTargetResult.session_target_id == target_id)
        return self.session.exec(statement).first()

    def create_paper_result(self, result: PaperTargetResult) -> PaperTargetResult:
        return self._save(result)

    def create_tactical_result(self, result: TacticalTargetResult) -> TacticalTargetResult:
        return self._save(result)

    def create_with_result(self, target: SessionTarget, result: ResultT) -> tuple[SessionTarget, ResultT]:
        """Insert a target and its result in one commit; neither is kept if either fails."""
        self.session.add(target)
        self._flush()
        result.session_target_id = target.id
        self.session.add(result)
        self._commit()
        self.session.refresh(target)
        self.session.refresh(result)
        return target, result
