"""Use-case handlers for Volunteer Hub."""

from volunteerhub.handlers.auth import login, logout, signup
from volunteerhub.handlers.events import (
    assign_volunteer_to_event,
    get_assigned_volunteer_ids,
    get_upcoming_events,
    upsert_event,
)
from volunteerhub.handlers.history import get_volunteer_history_for_user
from volunteerhub.handlers.matching import get_events_for_matching, get_volunteers_for_matching
from volunteerhub.handlers.notifications import get_notifications_for_user, mark_all_notifications_read
from volunteerhub.handlers.reports import (
    get_event_assignments_report,
    get_volunteer_activity_report,
    parse_report_format,
)
from volunteerhub.handlers.users import get_current_user, update_user

__all__ = [
    "login",
    "logout",
    "signup",
    "assign_volunteer_to_event",
    "get_assigned_volunteer_ids",
    "get_upcoming_events",
    "upsert_event",
    "get_volunteer_history_for_user",
    "get_events_for_matching",
    "get_volunteers_for_matching",
    "get_notifications_for_user",
    "mark_all_notifications_read",
    "get_event_assignments_report",
    "get_volunteer_activity_report",
    "parse_report_format",
    "get_current_user",
    "update_user",
]
