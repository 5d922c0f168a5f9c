"""Notification listing and bulk mark-as-read."""

import logging
from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from volunteerhub.database.models import Notification
from volunteerhub.database.repository import notification_repository
from volunteerhub.models.dtos import NotificationDto
from volunteerhub.models.mappers import notification_to_dto

logger = logging.getLogger(__name__)


def get_notifications_for_user(db: Session, user_id: str) -> List[NotificationDto]:
    """All of a user's notifications, newest first."""
    notifications = notification_repository(db).find(
        Notification.user_id == user_id,
        order_by=(desc(Notification.created_at), desc(Notification.id)),
    )
    return [notification_to_dto(n) for n in notifications]


def mark_all_notifications_read(db: Session, user_id: str) -> int:
    """Mark the user's unread notifications as read; returns how many changed."""
    repo = notification_repository(db)
    unread = repo.find(
        Notification.user_id == user_id,
        Notification.read.is_(False),
    )
    if not unread:
        return 0

    for notification in unread:
        notification.mark_as_read()
    repo.save()

    logger.debug(f"Marked {len(unread)} notification(s) read for user {user_id}")
    return len(unread)
