"""Tests for report aggregation and CSV/PDF rendering."""

import re
import pytest
from datetime import datetime, timezone

from volunteerhub.database.models import VolunteerHistory
from volunteerhub.database.reporting_repository import VolunteerReportingRepository
from volunteerhub.handlers import (
    get_event_assignments_report,
    get_volunteer_activity_report,
    parse_report_format,
)
from volunteerhub.handlers.reports import build_event_assignment_groups
from volunteerhub.models.enums import EventUrgency, ReportFileFormat, VolunteerSkill
from volunteerhub.reporting.formatter import ReportFormatter, build_file_name


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _lines(result):
    return result.content.decode("utf-8").split("\n")


@pytest.fixture
def report_data(db_session, make_user, make_event):
    """Two events with history plus one scheduled event with none."""
    ana = make_user(email="ana@example.com", profile={"first_name": "Ana", "last_name": "Zapata"})
    bob = make_user(email="bob@example.com", profile={"first_name": "Bob", "last_name": "Baker"})
    anon = make_user(email="anon@example.com")

    early = make_event(
        name='Say "hi"',
        date_utc=_utc(2026, 1, 10, 9, 0),
        urgency=EventUrgency.LOW,
        required_skills=[VolunteerSkill.TEACHING, VolunteerSkill.COOKING],
    )
    late = make_event(name="Late Event", date_utc=_utc(2026, 2, 1, 12, 0))
    empty = make_event(name="Empty Event", date_utc=_utc(2026, 1, 20, 12, 0), location="Hall, East")

    db_session.add(VolunteerHistory(bob.id, early.id, early.date_utc, 45))
    db_session.add(VolunteerHistory(ana.id, early.id, early.date_utc, 120))
    db_session.add(VolunteerHistory(anon.id, late.id, late.date_utc, 30))
    db_session.commit()

    return {"ana": ana, "bob": bob, "anon": anon, "early": early, "late": late, "empty": empty}


class TestParseReportFormat:
    """Test parse_report_format()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("pdf", ReportFileFormat.PDF),
            (" PDF ", ReportFileFormat.PDF),
            ("csv", ReportFileFormat.CSV),
            ("xlsx", ReportFileFormat.CSV),
            (None, ReportFileFormat.CSV),
            ("", ReportFileFormat.CSV),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_report_format(raw) is expected


class TestFileNames:
    """Test report file naming."""

    def test_build_file_name(self):
        now = _utc(2026, 3, 5, 7, 8, 9)
        assert build_file_name("volunteer-activity", ReportFileFormat.CSV, now) == (
            "volunteer-activity-20260305T070809Z.csv"
        )
        assert build_file_name("event-assignments", ReportFileFormat.PDF, now).endswith(".pdf")

    def test_generated_name_pattern(self, db_session):
        result = get_volunteer_activity_report(db_session)
        assert re.fullmatch(r"volunteer-activity-\d{8}T\d{6}Z\.csv", result.file_name)


class TestReportingRepository:
    """Test the inclusive range queries."""

    def test_histories_inclusive_bounds(self, db_session, report_data):
        repo = VolunteerReportingRepository(db_session)
        histories = repo.get_volunteer_histories(_utc(2026, 1, 10, 9, 0), _utc(2026, 1, 31))
        assert {h.event_id for h in histories} == {report_data["early"].id}
        assert len(histories) == 2

    def test_events_scheduled_in_range(self, db_session, report_data):
        repo = VolunteerReportingRepository(db_session)
        events = repo.get_events_scheduled(_utc(2026, 1, 15), _utc(2026, 2, 1, 12, 0))
        assert [e.name for e in events] == ["Empty Event", "Late Event"]

    def test_events_without_history(self, db_session, report_data):
        repo = VolunteerReportingRepository(db_session)
        events = repo.get_events_scheduled(without_history=True)
        assert [e.name for e in events] == ["Empty Event"]


class TestVolunteerActivityReport:
    """Test the volunteer activity report."""

    def test_csv_rows_sorted_and_quoted(self, db_session, report_data):
        result = get_volunteer_activity_report(db_session, fmt=ReportFileFormat.CSV)

        assert result.content_type == "text/csv"
        lines = _lines(result)
        assert lines[0] == "UserId,FullName,Email,EventId,EventName,EventDateUtc,DurationMinutes"
        early_id = report_data["early"].id
        assert lines[1] == (
            f'"{report_data["ana"].id}","Ana Zapata","ana@example.com","{early_id}",'
            f'"Say ""hi""","2026-01-10T09:00:00Z","120"'
        )
        assert '"Bob Baker"' in lines[2]
        assert '"No name given"' in lines[3]
        assert '"Late Event"' in lines[3]
        assert lines[4] == ""
        assert len(lines) == 5

    def test_range_filter(self, db_session, report_data):
        result = get_volunteer_activity_report(db_session, from_utc=_utc(2026, 1, 15))
        lines = _lines(result)
        assert len(lines) == 3
        assert '"Late Event"' in lines[1]

    def test_empty_csv_is_header_only(self, db_session):
        result = get_volunteer_activity_report(db_session)
        assert result.content == b"UserId,FullName,Email,EventId,EventName,EventDateUtc,DurationMinutes\n"

    def test_pdf(self, db_session, report_data):
        result = get_volunteer_activity_report(db_session, fmt=ReportFileFormat.PDF)
        assert result.content_type == "application/pdf"
        assert result.content.startswith(b"%PDF")
        assert result.file_name.endswith(".pdf")


class TestEventAssignmentsReport:
    """Test the event assignments report."""

    def test_csv_groups_and_empty_event(self, db_session, report_data):
        result = get_event_assignments_report(db_session)

        lines = _lines(result)
        assert lines[0] == (
            "EventId,EventName,EventDateUtc,Location,Urgency,RequiredSkills,"
            "UserId,FullName,Email,ParticipationDateUtc,DurationMinutes"
        )
        early_prefix = (
            f'"{report_data["early"].id}","Say ""hi""","2026-01-10T09:00:00Z",'
            f'"Community Center","Low","Cooking;Teaching",'
        )
        assert lines[1].startswith(early_prefix)
        assert '"Ana Zapata"' in lines[1]
        assert '"Bob Baker"' in lines[2]
        assert lines[3] == (
            f'"{report_data["empty"].id}","Empty Event","2026-01-20T12:00:00Z",'
            f'"Hall, East","Medium","","","","","",""'
        )
        assert '"No name given"' in lines[4]
        assert len(lines) == 6

    def test_pdf(self, db_session, report_data):
        result = get_event_assignments_report(db_session, fmt=ReportFileFormat.PDF)
        assert result.content.startswith(b"%PDF")
        assert re.fullmatch(r"event-assignments-\d{8}T\d{6}Z\.pdf", result.file_name)

    def test_empty_pdf_still_renders(self, db_session):
        result = ReportFormatter().event_assignments([], ReportFileFormat.PDF)
        assert result.content.startswith(b"%PDF")

    def test_participation_date_orders_volunteers(self, db_session, report_data):
        ana_history = (
            db_session.query(VolunteerHistory)
            .filter(VolunteerHistory.user_id == report_data["ana"].id)
            .one()
        )
        ana_history.reschedule(_utc(2026, 1, 10, 15, 0))
        db_session.commit()

        histories = VolunteerReportingRepository(db_session).get_volunteer_histories()
        early_group = build_event_assignment_groups(histories)[0]
        assert early_group.event_name == 'Say "hi"'
        assert [v.full_name for v in early_group.volunteers] == ["Bob Baker", "Ana Zapata"]

        lines = _lines(get_event_assignments_report(db_session))
        assert '"Bob Baker"' in lines[1]
        assert '"Ana Zapata"' in lines[2]
        assert '"2026-01-10T15:00:00Z"' in lines[2]

    def test_event_moved_into_range_is_omitted(self, db_session, report_data, make_event):
        moved = make_event(name="Moved Event", date_utc=_utc(2026, 1, 25, 10, 0))
        db_session.add(VolunteerHistory(report_data["bob"].id, moved.id, _utc(2025, 12, 1, 10, 0), 60))
        db_session.commit()

        in_range = get_event_assignments_report(db_session, from_utc=_utc(2026, 1, 1))
        assert b"Moved Event" not in in_range.content
        assert b"Empty Event" in in_range.content

        everything = get_event_assignments_report(db_session)
        moved_lines = [line for line in _lines(everything) if '"Moved Event"' in line]
        assert len(moved_lines) == 1
        assert '"Bob Baker"' in moved_lines[0]
