"""Transfer objects returned by the handlers.

JSON field names are camelCase; snake_case names are accepted on input too.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from volunteerhub.models.enums import EventUrgency, UserRole, VolunteerSkill


class CamelModel(BaseModel):
    """Base model serialised with camelCase aliases."""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True


class EventDto(CamelModel):
    id: str
    name: str
    description: str
    location: str
    date_iso_string: str = Field(..., description="Event date as ISO-8601 UTC")
    urgency: EventUrgency
    required_skills: List[VolunteerSkill] = Field(default_factory=list)


class NotificationDto(CamelModel):
    id: str
    user_id: str
    message: str
    read: bool
    created_at: datetime


class VolunteerHistoryDto(CamelModel):
    """A past (or scheduled) participation, shaped for the history page.

    ``id`` is the event id; ``date_iso_string`` is the participation date.
    """
    id: str
    name: str
    description: str
    location: str
    date_iso_string: str
    urgency: EventUrgency
    required_skills: List[VolunteerSkill] = Field(default_factory=list)
    time_at_event: str


class VolunteerDto(CamelModel):
    id: str
    name: str
    skills: List[VolunteerSkill] = Field(default_factory=list)
    availability: List[str] = Field(default_factory=list)


class UserDto(CamelModel):
    id: str
    email: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    skills: List[VolunteerSkill] = Field(default_factory=list)
    preferences: Optional[str] = None
    availability: List[str] = Field(default_factory=list)


class AuthResponse(CamelModel):
    id: str
    email: str
    role: UserRole


class AssignmentResult(CamelModel):
    volunteer_history_id: str
    event_id: str
    volunteer_id: str
    date_utc: datetime
    duration_minutes: int


class VolunteerActivityRow(CamelModel):
    """One history record flattened for the volunteer activity report."""
    user_id: str
    full_name: str
    email: str
    event_id: str
    event_name: str
    event_date_utc: datetime
    duration_minutes: int


class EventVolunteer(CamelModel):
    user_id: str
    full_name: str
    email: str
    participation_date_utc: datetime
    duration_minutes: int


class EventAssignmentGroup(CamelModel):
    """An event with every volunteer assigned to it (possibly none)."""
    event_id: str
    event_name: str
    event_date_utc: datetime
    location: str
    urgency: str
    required_skills: List[str] = Field(default_factory=list)
    volunteers: List[EventVolunteer] = Field(default_factory=list)


class FileReportResult(BaseModel):
    file_name: str
    content_type: str
    content: bytes
