"""Request bodies accepted by the API and the tri-state profile patch."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, List, Optional
from pydantic import Field

from volunteerhub.models.dtos import CamelModel
from volunteerhub.models.constants import DEFAULT_ASSIGNMENT_DURATION_MINUTES


# Marks a patch field the caller did not supply.
UNSET = object()


@dataclass(frozen=True)
class ProfilePatch:
    """Partial profile update.

    Each field is UNSET (keep the current value), None (explicit null) or a value.
    Skills stay as raw strings; the update handler parses them.
    """
    first_name: Any = UNSET
    last_name: Any = UNSET
    address_one: Any = UNSET
    address_two: Any = UNSET
    city: Any = UNSET
    state: Any = UNSET
    zip_code: Any = UNSET
    skills: Any = UNSET
    preferences: Any = UNSET
    availability: Any = UNSET

    def supplied(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def has_value(self, name: str) -> bool:
        value = getattr(self, name)
        return value is not UNSET and value is not None

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


class LoginRequest(CamelModel):
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Plain-text password")


class SignupRequest(CamelModel):
    email: str = Field(..., min_length=3, description="Account email")
    password: str = Field(..., min_length=1, description="Plain-text password")


class UpsertEventRequest(CamelModel):
    """Create (no id) or update (id) an event. Urgency and skills are parsed by the handler."""
    id: Optional[str] = None
    name: str
    description: str
    location: str
    date_utc: datetime
    urgency: str
    required_skills: List[Optional[str]] = Field(default_factory=list)


class AssignVolunteerRequest(CamelModel):
    volunteer_id: Optional[str] = None
    duration_minutes: int = DEFAULT_ASSIGNMENT_DURATION_MINUTES


class UpdateUserRequest(CamelModel):
    """Profile update body; omitted fields are left unchanged."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_one: Optional[str] = None
    address_two: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    skills: Optional[List[Optional[str]]] = None
    preferences: Optional[str] = None
    availability: Optional[List[str]] = None

    def to_patch(self) -> ProfilePatch:
        """Build a patch in which only fields present in the body are supplied."""
        supplied = {
            name: getattr(self, name)
            for name in ProfilePatch.field_names()
            if name in self.model_fields_set
        }
        return ProfilePatch(**supplied)
