"""Entity to DTO mapping and small presentation helpers."""

from datetime import datetime
from typing import Optional

from volunteerhub.database.models import (
    Event,
    Notification,
    UserCredentials,
    UserProfile,
    VolunteerHistory,
)
from volunteerhub.models.constants import NO_NAME_GIVEN
from volunteerhub.models.dates import ensure_utc, to_iso_utc
from volunteerhub.models.dtos import (
    AssignmentResult,
    EventDto,
    NotificationDto,
    UserDto,
    VolunteerDto,
    VolunteerHistoryDto,
)


def format_duration(minutes: int) -> str:
    """Human-readable duration: "1 hour 5 minutes", "45 minutes", "2 hours"."""
    if minutes is None or minutes <= 0:
        return "0 minutes"

    hours, remainder = divmod(int(minutes), 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour" if hours == 1 else f"{hours} hours")
    if remainder:
        parts.append(f"{remainder} minute" if remainder == 1 else f"{remainder} minutes")
    return " ".join(parts)


def format_long_date(value: datetime) -> str:
    """e.g. "March 5, 2026" (UTC)."""
    value = ensure_utc(value)
    return f"{value:%B} {value.day}, {value.year}"


def build_full_name(profile: Optional[UserProfile]) -> str:
    if profile is None:
        return NO_NAME_GIVEN
    first = (profile.first_name or "").strip()
    last = (profile.last_name or "").strip()
    if not first and not last:
        return NO_NAME_GIVEN
    return " ".join(part for part in (first, last) if part)


def event_to_dto(event: Event) -> EventDto:
    return EventDto(
        id=event.id,
        name=event.name,
        description=event.description,
        location=event.location,
        date_iso_string=to_iso_utc(event.date_utc),
        urgency=event.urgency,
        required_skills=event.required_skills,
    )


def notification_to_dto(notification: Notification) -> NotificationDto:
    return NotificationDto(
        id=notification.id,
        user_id=notification.user_id,
        message=notification.message,
        read=notification.read,
        created_at=ensure_utc(notification.created_at),
    )


def history_to_dto(history: VolunteerHistory, event: Event) -> VolunteerHistoryDto:
    """Event details with the participation date and formatted time at event."""
    return VolunteerHistoryDto(
        id=event.id,
        name=event.name,
        description=event.description,
        location=event.location,
        date_iso_string=to_iso_utc(history.date_utc),
        urgency=event.urgency,
        required_skills=event.required_skills,
        time_at_event=format_duration(history.duration_minutes),
    )


def history_to_assignment_result(history: VolunteerHistory) -> AssignmentResult:
    return AssignmentResult(
        volunteer_history_id=history.id,
        event_id=history.event_id,
        volunteer_id=history.user_id,
        date_utc=ensure_utc(history.date_utc),
        duration_minutes=history.duration_minutes,
    )


def user_to_dto(credentials: UserCredentials, profile: Optional[UserProfile] = None) -> UserDto:
    """Map credentials plus optional profile; profile fields stay empty without one."""
    if profile is None:
        return UserDto(id=credentials.id, email=credentials.email, role=credentials.role, preferences="")
    return UserDto(
        id=credentials.id,
        email=credentials.email,
        role=credentials.role,
        first_name=profile.first_name,
        last_name=profile.last_name,
        address_one=profile.address_one,
        address_two=profile.address_two,
        city=profile.city,
        state=profile.state,
        zip_code=profile.zip_code,
        skills=profile.skills,
        preferences=profile.preferences,
        availability=list(profile.availability or []),
    )


def profile_to_volunteer_dto(profile: UserProfile) -> VolunteerDto:
    return VolunteerDto(
        id=profile.id,
        name=f"{profile.first_name} {profile.last_name}",
        skills=profile.skills,
        availability=list(profile.availability or []),
    )
