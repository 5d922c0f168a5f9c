"""Enumerations and the shared enum parser for Volunteer Hub."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, Iterable, List, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class UserRole(str, Enum):
    """Role attached to user credentials."""
    VOLUNTEER = "Volunteer"
    ADMIN = "Admin"


class EventUrgency(str, Enum):
    """Event priority."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class VolunteerSkill(str, Enum):
    """Fixed set of volunteer capability tags."""
    COOKING = "Cooking"
    DRIVING = "Driving"
    TEACHING = "Teaching"
    CLEANING = "Cleaning"
    FUNDRAISING = "Fundraising"
    MEDICAL_AID = "MedicalAid"
    COUNSELING = "Counseling"
    EVENT_PLANNING = "EventPlanning"
    CHILD_CARE = "ChildCare"
    ELDERLY_CARE = "ElderlyCare"
    ANIMAL_CARE = "AnimalCare"
    CONSTRUCTION = "Construction"
    GARDENING = "Gardening"
    IT_SUPPORT = "ITSupport"
    MARKETING = "Marketing"
    PHOTOGRAPHY = "Photography"
    WRITING = "Writing"
    TRANSLATION = "Translation"
    LEGAL_AID = "LegalAid"


class ReportFileFormat(str, Enum):
    """Output format for report downloads."""
    CSV = "csv"
    PDF = "pdf"


@dataclass(frozen=True)
class EnumParseResult(Generic[E]):
    """Outcome of parsing a raw string into an enum member."""
    value: Optional[E] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


_LOOKUPS: Dict[type, Dict[str, Enum]] = {}


def _lookup_for(enum_cls: Type[E]) -> Dict[str, E]:
    lookup = _LOOKUPS.get(enum_cls)
    if lookup is None:
        lookup = {}
        for member in enum_cls:
            lookup[str(member.value).lower()] = member
        _LOOKUPS[enum_cls] = lookup
    return lookup


def allowed_values(enum_cls: Type[E]) -> List[str]:
    """Return the accepted spellings of an enum, in declaration order."""
    return [str(member.value) for member in enum_cls]


def parse_enum(enum_cls: Type[E], raw: Optional[str], label: Optional[str] = None) -> EnumParseResult[E]:
    """Parse ``raw`` into ``enum_cls`` (trimmed, case-insensitive).

    Never raises; the returned result carries either the member or an error
    message naming the rejected value and the allowed set.
    """
    label = label or enum_cls.__name__
    key = raw.strip().lower() if isinstance(raw, str) else None
    member = _lookup_for(enum_cls).get(key) if key else None
    if member is None:
        return EnumParseResult(
            error=(
                f"Invalid {label} value '{raw}'. "
                f"Expected one of: {', '.join(allowed_values(enum_cls))}."
            )
        )
    return EnumParseResult(value=member)


def parse_skills(raw_skills: Optional[Iterable[Optional[str]]]) -> EnumParseResult[List[VolunteerSkill]]:
    """Parse skill strings, skipping blank entries.

    Stops at the first unparseable entry.
    """
    skills: List[VolunteerSkill] = []
    for raw in raw_skills or []:
        if raw is None or not raw.strip():
            continue
        result = parse_enum(VolunteerSkill, raw, label="skill")
        if not result.ok:
            return EnumParseResult(error=result.error)
        skills.append(result.value)
    return EnumParseResult(value=skills)
