"""
Repository base class.

Flushes and commits go through :class:`BaseRepository`, which rolls back
and re-raises ORM errors as :class:`StoreFailure`.
"""

from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel

from app.core.exceptions import StoreConstraintViolation, StoreFailure

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository:
    """Shared persistence helpers."""

    def __init__(self, session: Session):
        self.session = session

    def _write(self, operation: Callable[[], None]) -> None:
        try:
            operation()
        except IntegrityError as exc:
            self.session.rollback()
            raise StoreConstraintViolation(f"Constraint violated: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreFailure(f"Store operation failed: {exc.__class__.__name__}") from exc

    def _flush(self) -> None:
        self._write(self.session.flush)

    def _commit(self) -> None:
        self._write(self.session.commit)

    def _save(self, entry: ModelT) -> ModelT:
        self.session.add(entry)
        self._commit()
        self.session.refresh(entry)
        return entry
