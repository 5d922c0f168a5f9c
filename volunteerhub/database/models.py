"""SQLAlchemy entities for Volunteer Hub.

Entities validate their own invariants in their constructors and mutators.
Rows loaded from the database bypass ``__init__``, so stored data is trusted.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Type, TypeVar, Union
import uuid
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship, synonym
from sqlalchemy.types import TypeDecorator

from volunteerhub.database.database import Base
from volunteerhub.exceptions import DomainValidationError
from volunteerhub.models.dates import ensure_utc, utc_now
from volunteerhub.models.enums import EventUrgency, UserRole, VolunteerSkill

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def _coerce_enum(value, enum_class: Type[T], param: str) -> T:
    try:
        return enum_class(value)
    except ValueError:
        raise DomainValidationError(param, f"'{value}' is not a valid {enum_class.__name__}.")


def _require_text(value: Optional[str], param: str, message: str) -> str:
    if value is None or not str(value).strip():
        raise DomainValidationError(param, message)
    return value


def _require_date(value: Optional[datetime], param: str) -> datetime:
    if value is None:
        raise DomainValidationError(param, "Date is required.")
    return ensure_utc(value)


def _require_positive_duration(duration_minutes: Optional[int]) -> int:
    if duration_minutes is None or duration_minutes <= 0:
        raise DomainValidationError("duration_minutes", "Duration must be positive.")
    return int(duration_minutes)


def _distinct(values: Iterable) -> list:
    """Deduplicate while preserving order."""
    return list(dict.fromkeys(values))


def _skills_to_json(skills: Optional[Iterable[VolunteerSkill]], param: str) -> List[str]:
    coerced = [_coerce_enum(skill, VolunteerSkill, param) for skill in (skills or [])]
    return [enum_to_value(skill) for skill in _distinct(coerced)]


def _clean_availability(availability: Optional[Iterable[str]]) -> List[str]:
    return _distinct(a for a in (availability or []) if a is not None and str(a).strip())


def _new_id() -> str:
    return uuid.uuid4().hex


def _enum_column(enum_class):
    # Store the enum's value (e.g. "Admin"), not its member name.
    return SAEnum(
        enum_class,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )


class UtcDateTime(TypeDecorator):
    """DateTime stored as naive UTC and always returned timezone-aware (UTC)."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ensure_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class UserCredentials(Base):
    """Identity record: email, password hash and role."""

    __tablename__ = "user_credentials"

    id = Column(String(64), primary_key=True)
    email = Column(String(256), nullable=False, unique=True, index=True)
    password_hash = Column(String(512), nullable=False)
    role = Column(_enum_column(UserRole), nullable=False, default=UserRole.VOLUNTEER)

    profile = relationship(
        "UserProfile",
        back_populates="credentials",
        uselist=False,
        cascade="all, delete-orphan",
    )
    notifications = relationship(
        "Notification",
        back_populates="user_credentials",
        cascade="all, delete-orphan",
    )

    def __init__(self, email: str, password_hash: str, role: UserRole = UserRole.VOLUNTEER):
        self.id = _new_id()
        self.email = _require_text(email, "email", "Email is required.").strip().lower()
        self.password_hash = _require_text(password_hash, "password_hash", "Password is required.")
        self.role = _coerce_enum(role, UserRole, "role")

    def change_role(self, role: UserRole) -> None:
        self.role = _coerce_enum(role, UserRole, "role")

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = _require_text(password_hash, "password_hash", "Password is required.")


class UserProfile(Base):
    """Extended attributes of a user, keyed 1:1 by the owning credentials id."""

    __tablename__ = "user_profiles"

    user_credentials_id = Column(
        String(64),
        ForeignKey("user_credentials.id", ondelete="CASCADE"),
        primary_key=True,
    )
    id = synonym("user_credentials_id")

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    address_one = Column(String(100), nullable=False)
    address_two = Column(String(100), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False)
    zip_code = Column(String(9), nullable=False)

    skills_raw = Column("skills", JSON, nullable=False, default=list)
    preferences = Column(String(2000), nullable=False, default="")
    availability = Column(JSON, nullable=False, default=list)

    credentials = relationship("UserCredentials", back_populates="profile")

    def __init__(
        self,
        user_credentials_id: str,
        first_name: str,
        last_name: str,
        address_one: str,
        city: str,
        state: str,
        zip_code: str,
        address_two: Optional[str] = None,
        preferences: Optional[str] = None,
        skills: Optional[Iterable[VolunteerSkill]] = None,
        availability: Optional[Iterable[str]] = None,
    ):
        self.user_credentials_id = _require_text(
            user_credentials_id, "user_credentials_id", "UserCredentialsId is required."
        )
        self._apply(
            first_name=first_name,
            last_name=last_name,
            address_one=address_one,
            address_two=address_two,
            city=city,
            state=state,
            zip_code=zip_code,
            preferences=preferences,
            skills=skills,
            availability=availability,
        )

    @property
    def skills(self) -> List[VolunteerSkill]:
        return [VolunteerSkill(s) for s in (self.skills_raw or [])]

    def update_profile(
        self,
        first_name: str,
        last_name: str,
        address_one: str,
        address_two: Optional[str],
        city: str,
        state: str,
        zip_code: str,
        preferences: Optional[str],
        skills: Optional[Iterable[VolunteerSkill]],
        availability: Optional[Iterable[str]],
    ) -> None:
        """Replace every profile field, re-validating the required ones."""
        self._apply(
            first_name=first_name,
            last_name=last_name,
            address_one=address_one,
            address_two=address_two,
            city=city,
            state=state,
            zip_code=zip_code,
            preferences=preferences,
            skills=skills,
            availability=availability,
        )

    def _apply(self, *, first_name, last_name, address_one, address_two, city, state, zip_code,
               preferences, skills, availability) -> None:
        # Validate everything before assigning anything.
        _require_text(first_name, "first_name", "First name is required.")
        _require_text(last_name, "last_name", "Last name is required.")
        _require_text(address_one, "address_one", "AddressOne is required.")
        _require_text(city, "city", "City is required.")
        _require_text(state, "state", "State is required.")
        _require_text(zip_code, "zip_code", "ZipCode is required.")
        skills_json = _skills_to_json(skills, "skills")

        self.first_name = first_name
        self.last_name = last_name
        self.address_one = address_one
        self.address_two = address_two if address_two and address_two.strip() else None
        self.city = city
        self.state = state
        self.zip_code = zip_code
        self.preferences = preferences if preferences is not None else ""
        self.skills_raw = skills_json
        self.availability = _clean_availability(availability)


class Event(Base):
    """An event volunteers can be assigned to."""

    __tablename__ = "events"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(String(4000), nullable=False)
    location = Column(String(500), nullable=False)
    date_utc = Column(UtcDateTime, nullable=False, index=True)
    urgency = Column(_enum_column(EventUrgency), nullable=False)
    required_skills_raw = Column("required_skills", JSON, nullable=False, default=list)

    def __init__(
        self,
        name: str,
        description: str,
        location: str,
        date_utc: datetime,
        urgency: EventUrgency,
        required_skills: Optional[Iterable[VolunteerSkill]] = None,
    ):
        _require_text(name, "name", "Name is required.")
        _require_text(description, "description", "Description is required.")
        _require_text(location, "location", "Location is required.")
        date_value = _require_date(date_utc, "date_utc")
        urgency_value = _coerce_enum(urgency, EventUrgency, "urgency")
        skills_json = _skills_to_json(required_skills, "required_skills")

        self.id = _new_id()
        self.name = name
        self.description = description
        self.location = location
        self.date_utc = date_value
        self.urgency = urgency_value
        self.required_skills_raw = skills_json

    @property
    def required_skills(self) -> List[VolunteerSkill]:
        return [VolunteerSkill(s) for s in (self.required_skills_raw or [])]

    def update_details(self, name: str, description: str, location: str, urgency: EventUrgency) -> None:
        _require_text(name, "name", "Name is required.")
        _require_text(description, "description", "Description is required.")
        _require_text(location, "location", "Location is required.")
        urgency_value = _coerce_enum(urgency, EventUrgency, "urgency")

        self.name = name
        self.description = description
        self.location = location
        self.urgency = urgency_value

    def reschedule(self, new_date_utc: datetime) -> None:
        self.date_utc = _require_date(new_date_utc, "new_date_utc")

    def set_required_skills(self, skills: Optional[Iterable[VolunteerSkill]]) -> None:
        self.required_skills_raw = _skills_to_json(skills, "skills")


class VolunteerHistory(Base):
    """Assignment of a volunteer to an event (one row per user/event pair)."""

    __tablename__ = "volunteer_history"
    __table_args__ = (
        # At most one assignment per (user, event); the history repository
        # relies on this to make assignment idempotent under concurrency.
        UniqueConstraint("user_id", "event_id", name="uq_volunteer_history_user_event"),
        Index("ix_volunteer_history_user_date", "user_id", "date_utc"),
    )

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), ForeignKey("user_credentials.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    date_utc = Column(UtcDateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    created_at_utc = Column(UtcDateTime, nullable=False)

    user = relationship("UserCredentials")
    event = relationship("Event")

    def __init__(self, user_id: str, event_id: str, date_utc: datetime, duration_minutes: int):
        _require_text(user_id, "user_id", "UserId is required.")
        _require_text(event_id, "event_id", "EventId is required.")
        duration = _require_positive_duration(duration_minutes)
        date_value = _require_date(date_utc, "date_utc")

        self.id = _new_id()
        self.user_id = user_id
        self.event_id = event_id
        self.date_utc = date_value
        self.duration_minutes = duration
        self.created_at_utc = utc_now()

    def update_duration(self, duration_minutes: int) -> None:
        self.duration_minutes = _require_positive_duration(duration_minutes)

    def reschedule(self, new_date_utc: datetime) -> None:
        self.date_utc = _require_date(new_date_utc, "new_date_utc")


class Notification(Base):
    """A message for a user; only the read flag ever changes."""

    __tablename__ = "notifications"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), ForeignKey("user_credentials.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(String(2000), nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(UtcDateTime, nullable=False)

    user_credentials = relationship("UserCredentials", back_populates="notifications")

    def __init__(self, user_id: str, message: str):
        self.id = _new_id()
        self.user_id = _require_text(user_id, "user_id", "UserId is required.")
        self.message = _require_text(message, "message", "Message is required.")
        self.read = False
        self.created_at = utc_now()

    def mark_as_read(self) -> None:
        if not self.read:
            self.read = True
