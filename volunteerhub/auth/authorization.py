"""Role-based authorization requirement handlers.

Both handlers read the ``sub`` claim and look the role up in the read store
rather than trusting the token's ``role`` claim, so a demotion takes effect
immediately.
"""

import logging
from typing import Any, Mapping, Optional

from volunteerhub.database.user_read_store import UserReadStore
from volunteerhub.models.enums import UserRole

logger = logging.getLogger(__name__)


def _subject(claims: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not claims:
        return None
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        return None
    return sub


class AdminRequirementHandler:
    """Succeeds only for subjects whose stored role is Admin."""

    def __init__(self, read_store: UserReadStore):
        self.read_store = read_store

    def handle(self, claims: Optional[Mapping[str, Any]]) -> bool:
        user_id = _subject(claims)
        if user_id is None:
            return False
        role = self.read_store.get_role(user_id)
        if role != UserRole.ADMIN:
            logger.info(f"Admin requirement denied for user {user_id}")
            return False
        return True


class UserRequirementHandler:
    """Gate for the matching endpoints.

    Currently grants access to Admin subjects only, the same rule as
    AdminRequirementHandler.
    """

    def __init__(self, read_store: UserReadStore):
        self.read_store = read_store

    def handle(self, claims: Optional[Mapping[str, Any]]) -> bool:
        user_id = _subject(claims)
        if user_id is None:
            return False
        return self.read_store.get_role(user_id) == UserRole.ADMIN
