"""Event handlers: upsert, assignment and event listings."""

import logging
from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from volunteerhub.database.models import Event, Notification, UserCredentials, VolunteerHistory
from volunteerhub.database.repository import (
    VolunteerHistoryRepository,
    credentials_repository,
    event_repository,
    notification_repository,
)
from volunteerhub.exceptions import EntityNotFoundError, RequestValidationError
from volunteerhub.models.constants import DEFAULT_ASSIGNMENT_DURATION_MINUTES
from volunteerhub.models.dates import utc_now
from volunteerhub.models.dtos import AssignmentResult, EventDto
from volunteerhub.models.enums import EventUrgency, UserRole, parse_enum, parse_skills
from volunteerhub.models.mappers import event_to_dto, format_long_date, history_to_assignment_result

logger = logging.getLogger(__name__)


def upsert_event(
    db: Session,
    *,
    event_id: Optional[str],
    name: str,
    description: str,
    location: str,
    date_utc: datetime,
    urgency: str,
    required_skills: Optional[Iterable[Optional[str]]] = None,
) -> EventDto:
    """Create an event (no id) or update an existing one.

    Urgency and skills are parsed before anything is touched.

    Raises:
        RequestValidationError: If urgency or a skill cannot be parsed
        EntityNotFoundError: If ``event_id`` is given but no such event exists
        DomainValidationError: If the event fields break an entity invariant
    """
    urgency_result = parse_enum(EventUrgency, urgency, label="urgency")
    if not urgency_result.ok:
        raise RequestValidationError(urgency_result.error, {"field": "urgency"})

    skills_result = parse_skills(required_skills)
    if not skills_result.ok:
        raise RequestValidationError(skills_result.error, {"field": "requiredSkills"})

    events = event_repository(db)

    if event_id is None or not event_id.strip():
        event = Event(
            name=name,
            description=description,
            location=location,
            date_utc=date_utc,
            urgency=urgency_result.value,
            required_skills=skills_result.value,
        )
        events.queue_insert(event)
    else:
        event = events.get(Event.id == event_id)
        if event is None:
            raise EntityNotFoundError(f"Event with id '{event_id}' not found.", {"event_id": event_id})

        event.update_details(
            name=name,
            description=description,
            location=location,
            urgency=urgency_result.value,
        )
        event.reschedule(date_utc)
        event.set_required_skills(skills_result.value)

    events.save()
    logger.debug(f"Upserted event {event.id}")
    return event_to_dto(event)


def assign_volunteer_to_event(
    db: Session,
    *,
    event_id: str,
    volunteer_id: str,
    duration_minutes: int = DEFAULT_ASSIGNMENT_DURATION_MINUTES,
) -> Optional[AssignmentResult]:
    """Assign a volunteer to an event, at most once per (volunteer, event).

    Returns None if the event is missing or the user is not a Volunteer.
    Repeat assignments return the existing record and write nothing.
    """
    event = event_repository(db).get(Event.id == event_id)
    if event is None:
        return None

    volunteer = credentials_repository(db).get(
        UserCredentials.id == volunteer_id,
        UserCredentials.role == UserRole.VOLUNTEER,
    )
    if volunteer is None:
        return None

    history_repo = VolunteerHistoryRepository(db)
    existing = history_repo.get_for(volunteer_id, event_id)
    if existing is not None:
        return history_to_assignment_result(existing)

    history, created = history_repo.insert_or_get(
        VolunteerHistory(
            user_id=volunteer_id,
            event_id=event_id,
            date_utc=event.date_utc,
            duration_minutes=duration_minutes,
        )
    )
    if not created:
        return history_to_assignment_result(history)

    notification_repository(db).queue_insert(
        Notification(
            user_id=volunteer.id,
            message=(
                f"You’ve been assigned to the event “{event.name}” "
                f"on {format_long_date(event.date_utc)}."
            ),
        )
    )
    history_repo.save()

    logger.info(f"Assigned volunteer {volunteer_id} to event {event_id}")
    return history_to_assignment_result(history)


def get_upcoming_events(db: Session) -> List[EventDto]:
    """Events strictly after now, soonest first."""
    events = event_repository(db).find(
        Event.date_utc > utc_now(),
        order_by=(Event.date_utc,),
    )
    return [event_to_dto(event) for event in events]


def get_assigned_volunteer_ids(db: Session, event_id: str) -> List[str]:
    """Distinct volunteer ids assigned to an event, in first-seen order."""
    histories = VolunteerHistoryRepository(db).find(
        VolunteerHistory.event_id == event_id,
        order_by=(VolunteerHistory.created_at_utc, VolunteerHistory.id),
    )
    return list(dict.fromkeys(h.user_id for h in histories))
