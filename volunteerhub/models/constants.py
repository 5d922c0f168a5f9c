"""Constants for Volunteer Hub.

This module centralizes default values and fixed strings used throughout the application.
"""

# Assignment defaults
DEFAULT_ASSIGNMENT_DURATION_MINUTES = 60

# Notification messages
WELCOME_MESSAGE = "Welcome to Volunteer Hub! 🎉 Thanks for signing up."

# Reports
NO_NAME_GIVEN = "No name given"
REQUIRED_SKILLS_SEPARATOR = ";"

VOLUNTEER_ACTIVITY_REPORT_NAME = "volunteer-activity"
EVENT_ASSIGNMENTS_REPORT_NAME = "event-assignments"

VOLUNTEER_ACTIVITY_COLUMNS = [
    "UserId",
    "FullName",
    "Email",
    "EventId",
    "EventName",
    "EventDateUtc",
    "DurationMinutes",
]

EVENT_ASSIGNMENTS_COLUMNS = [
    "EventId",
    "EventName",
    "EventDateUtc",
    "Location",
    "Urgency",
    "RequiredSkills",
    "UserId",
    "FullName",
    "Email",
    "ParticipationDateUtc",
    "DurationMinutes",
]

CSV_CONTENT_TYPE = "text/csv"
PDF_CONTENT_TYPE = "application/pdf"

# Auth cookie
AUTH_COOKIE_NAME = "auth_token"
