"""A volunteer's own participation history."""

from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from volunteerhub.database.models import VolunteerHistory
from volunteerhub.database.repository import VolunteerHistoryRepository
from volunteerhub.models.dtos import VolunteerHistoryDto
from volunteerhub.models.mappers import history_to_dto


def get_volunteer_history_for_user(db: Session, user_id: str) -> List[VolunteerHistoryDto]:
    """The user's history joined to its events, most recent participation first."""
    histories = VolunteerHistoryRepository(db).find(
        VolunteerHistory.user_id == user_id,
        order_by=(desc(VolunteerHistory.date_utc),),
        options=(joinedload(VolunteerHistory.event),),
    )
    return [history_to_dto(h, h.event) for h in histories if h.event is not None]
