"""Data models for Volunteer Hub."""

from volunteerhub.models.enums import (
    EnumParseResult,
    EventUrgency,
    ReportFileFormat,
    UserRole,
    VolunteerSkill,
    parse_enum,
    parse_skills,
)
from volunteerhub.models.dtos import (
    AssignmentResult,
    AuthResponse,
    EventAssignmentGroup,
    EventDto,
    EventVolunteer,
    FileReportResult,
    NotificationDto,
    UserDto,
    VolunteerActivityRow,
    VolunteerDto,
    VolunteerHistoryDto,
)
from volunteerhub.models.requests import ProfilePatch, UNSET

__all__ = [
    "EnumParseResult",
    "EventUrgency",
    "ReportFileFormat",
    "UserRole",
    "VolunteerSkill",
    "parse_enum",
    "parse_skills",
    "AssignmentResult",
    "AuthResponse",
    "EventAssignmentGroup",
    "EventDto",
    "EventVolunteer",
    "FileReportResult",
    "NotificationDto",
    "UserDto",
    "VolunteerActivityRow",
    "VolunteerDto",
    "VolunteerHistoryDto",
    "ProfilePatch",
    "UNSET",
]
