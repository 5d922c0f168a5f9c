"""Report aggregation: volunteer activity and event assignments."""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from volunteerhub.database.models import Event, VolunteerHistory
from volunteerhub.database.reporting_repository import VolunteerReportingRepository
from volunteerhub.models.dtos import (
    EventAssignmentGroup,
    EventVolunteer,
    FileReportResult,
    VolunteerActivityRow,
)
from volunteerhub.models.enums import ReportFileFormat, parse_enum
from volunteerhub.models.mappers import build_full_name
from volunteerhub.reporting.formatter import ReportFormatter

logger = logging.getLogger(__name__)


def parse_report_format(raw: Optional[str]) -> ReportFileFormat:
    """Case-insensitive format; anything unrecognised (or missing) means CSV."""
    result = parse_enum(ReportFileFormat, raw, label="format")
    return result.value if result.ok else ReportFileFormat.CSV


def _profile_of(history: VolunteerHistory):
    return history.user.profile if history.user is not None else None


def build_volunteer_activity_rows(histories: List[VolunteerHistory]) -> List[VolunteerActivityRow]:
    """One row per history, sorted by event date, event name, then full name."""
    rows = [
        VolunteerActivityRow(
            user_id=h.user_id,
            full_name=build_full_name(_profile_of(h)),
            email=h.user.email,
            event_id=h.event_id,
            event_name=h.event.name,
            event_date_utc=h.event.date_utc,
            duration_minutes=h.duration_minutes,
        )
        for h in histories
    ]
    return sorted(rows, key=lambda r: (r.event_date_utc, r.event_name, r.full_name))


def _group_for(event: Event, histories: List[VolunteerHistory]) -> EventAssignmentGroup:
    volunteers = sorted(
        (
            EventVolunteer(
                user_id=h.user_id,
                full_name=build_full_name(_profile_of(h)),
                email=h.user.email,
                participation_date_utc=h.date_utc,
                duration_minutes=h.duration_minutes,
            )
            for h in histories
        ),
        key=lambda v: (v.participation_date_utc, v.full_name),
    )
    return EventAssignmentGroup(
        event_id=event.id,
        event_name=event.name,
        event_date_utc=event.date_utc,
        location=event.location,
        urgency=event.urgency.value,
        required_skills=sorted(skill.value for skill in event.required_skills),
        volunteers=volunteers,
    )


def build_event_assignment_groups(
    histories: List[VolunteerHistory],
    scheduled_events: Optional[List[Event]] = None,
) -> List[EventAssignmentGroup]:
    """Group histories by event; scheduled events without history get an empty group.

    Groups are sorted by event date then name.
    """
    events: Dict[str, Event] = {}
    by_event: Dict[str, List[VolunteerHistory]] = {}
    for h in histories:
        events.setdefault(h.event_id, h.event)
        by_event.setdefault(h.event_id, []).append(h)

    for event in scheduled_events or []:
        if event.id not in events:
            events[event.id] = event
            by_event[event.id] = []

    groups = [_group_for(events[event_id], by_event[event_id]) for event_id in events]
    return sorted(groups, key=lambda g: (g.event_date_utc, g.event_name))


def get_volunteer_activity_report(
    db: Session,
    from_utc: Optional[datetime] = None,
    to_utc: Optional[datetime] = None,
    fmt: ReportFileFormat = ReportFileFormat.CSV,
    formatter: Optional[ReportFormatter] = None,
) -> FileReportResult:
    histories = VolunteerReportingRepository(db).get_volunteer_histories(from_utc, to_utc)
    rows = build_volunteer_activity_rows(histories)
    logger.info(f"Building volunteer activity report: {len(rows)} row(s)")
    return (formatter or ReportFormatter()).volunteer_activity(rows, fmt)


def get_event_assignments_report(
    db: Session,
    from_utc: Optional[datetime] = None,
    to_utc: Optional[datetime] = None,
    fmt: ReportFileFormat = ReportFileFormat.CSV,
    formatter: Optional[ReportFormatter] = None,
) -> FileReportResult:
    repo = VolunteerReportingRepository(db)
    # An event whose history lies outside the range is omitted, not shown empty.
    groups = build_event_assignment_groups(
        repo.get_volunteer_histories(from_utc, to_utc),
        repo.get_events_scheduled(from_utc, to_utc, without_history=True),
    )
    logger.info(f"Building event assignments report: {len(groups)} event(s)")
    return (formatter or ReportFormatter()).event_assignments(groups, fmt)
