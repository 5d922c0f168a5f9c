"""Listings used by the admin volunteer-matching screen."""

from typing import List
from sqlalchemy.orm import Session

from volunteerhub.database.models import Event, UserCredentials, UserProfile
from volunteerhub.database.repository import event_repository
from volunteerhub.models.dates import utc_now
from volunteerhub.models.dtos import EventDto, VolunteerDto
from volunteerhub.models.enums import UserRole
from volunteerhub.models.mappers import event_to_dto, profile_to_volunteer_dto


def get_volunteers_for_matching(db: Session) -> List[VolunteerDto]:
    """Profiles of every user whose role is Volunteer."""
    profiles = (
        db.query(UserProfile)
        .join(UserCredentials, UserCredentials.id == UserProfile.user_credentials_id)
        .filter(UserCredentials.role == UserRole.VOLUNTEER)
        .order_by(UserProfile.last_name, UserProfile.first_name)
        .all()
    )
    return [profile_to_volunteer_dto(p) for p in profiles]


def get_events_for_matching(db: Session) -> List[EventDto]:
    """Events from now on, soonest first."""
    events = event_repository(db).find(
        Event.date_utc >= utc_now(),
        order_by=(Event.date_utc,),
    )
    return [event_to_dto(e) for e in events]
