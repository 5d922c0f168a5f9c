"""Column-only lookups of user identity data.

These queries select plain columns, so nothing is added to the session's
identity map or change tracking.
"""

from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from volunteerhub.database.models import UserCredentials
from volunteerhub.models.enums import UserRole


@dataclass(frozen=True)
class UserSummary:
    id: str
    email: str
    role: UserRole


class UserReadStore:
    """Read store for user roles and summaries."""

    def __init__(self, db: Session):
        self.db = db

    def get_role(self, user_id: str) -> Optional[UserRole]:
        row = (
            self.db.query(UserCredentials.role)
            .filter(UserCredentials.id == user_id)
            .first()
        )
        return row[0] if row else None

    def get_role_by_email(self, email: str) -> Optional[UserRole]:
        row = (
            self.db.query(UserCredentials.role)
            .filter(UserCredentials.email == email.strip().lower())
            .first()
        )
        return row[0] if row else None

    def get_summary(self, user_id: str) -> Optional[UserSummary]:
        row = (
            self.db.query(UserCredentials.id, UserCredentials.email, UserCredentials.role)
            .filter(UserCredentials.id == user_id)
            .first()
        )
        if row is None:
            return None
        return UserSummary(id=row[0], email=row[1], role=row[2])
