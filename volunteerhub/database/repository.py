"""Repository layer for database operations.

A repository only stages work on the request's session; nothing reaches the
database until ``save()`` commits. Handlers share one session, so a single
``save()`` persists everything staged through any repository.
"""

import logging
from typing import Generic, List, Optional, Sequence, Tuple, Type, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteerhub.database.models import (
    Event,
    Notification,
    UserCredentials,
    UserProfile,
    VolunteerHistory,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(Generic[T]):
    """Generic find/get/queue_insert/save over one entity type."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def find(self, *criteria, order_by: Sequence = (), options: Sequence = ()) -> List[T]:
        """Return every row matching all criteria (possibly empty)."""
        query = self.db.query(self.model)
        if options:
            query = query.options(*options)
        if criteria:
            query = query.filter(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def get(self, *criteria, options: Sequence = ()) -> Optional[T]:
        """Return the first row matching all criteria, or None."""
        query = self.db.query(self.model)
        if options:
            query = query.options(*options)
        return query.filter(*criteria).first()

    def queue_insert(self, entity: T) -> None:
        """Stage a new entity; it is written by the next ``save()``."""
        self.db.add(entity)

    def save(self) -> int:
        """Commit all staged inserts and modifications.

        Returns the number of entities written. Failures roll back and propagate.
        """
        pending = len(self.db.new) + len(self.db.dirty) + len(self.db.deleted)
        try:
            self.db.commit()
            logger.debug(f"Saved {pending} change(s) via {self.model.__name__} repository")
            return pending
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Failed to save {self.model.__name__} changes: {type(e).__name__}: {str(e)}"
            )
            raise


class VolunteerHistoryRepository(Repository[VolunteerHistory]):
    """Repository for VolunteerHistory with an atomic insert-or-get."""

    def __init__(self, db: Session):
        super().__init__(db, VolunteerHistory)

    def get_for(self, user_id: str, event_id: str) -> Optional[VolunteerHistory]:
        return self.get(
            VolunteerHistory.user_id == user_id,
            VolunteerHistory.event_id == event_id,
        )

    def insert_or_get(self, history: VolunteerHistory) -> Tuple[VolunteerHistory, bool]:
        """Insert ``history`` unless a row for the same (user, event) exists.

        The insert runs inside a savepoint. If the unique constraint rejects
        it, the savepoint is rolled back and the existing row is returned.
        Returns ``(row, created)``.
        """
        try:
            with self.db.begin_nested():
                self.db.add(history)
        except IntegrityError:
            existing = self.get_for(history.user_id, history.event_id)
            if existing is None:
                raise
            logger.debug(
                f"History for user {history.user_id} and event {history.event_id} already exists"
            )
            return existing, False
        logger.debug(f"Inserted history {history.id} for event {history.event_id}")
        return history, True


def credentials_repository(db: Session) -> Repository[UserCredentials]:
    return Repository(db, UserCredentials)


def profile_repository(db: Session) -> Repository[UserProfile]:
    return Repository(db, UserProfile)


def event_repository(db: Session) -> Repository[Event]:
    return Repository(db, Event)


def notification_repository(db: Session) -> Repository[Notification]:
    return Repository(db, Notification)
