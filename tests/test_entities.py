"""Tests for entity invariants and mutators."""

import pytest
from datetime import datetime, timedelta, timezone

from volunteerhub.database.models import (
    Event,
    Notification,
    UserCredentials,
    UserProfile,
    VolunteerHistory,
)
from volunteerhub.exceptions import DomainValidationError
from volunteerhub.models.enums import EventUrgency, UserRole, VolunteerSkill


def _event(**overrides) -> Event:
    fields = {
        "name": "Park Cleanup",
        "description": "Pick up litter",
        "location": "Hermann Park",
        "date_utc": datetime(2026, 5, 1, 15, 0, tzinfo=timezone.utc),
        "urgency": EventUrgency.HIGH,
        "required_skills": [VolunteerSkill.CLEANING],
    }
    fields.update(overrides)
    return Event(**fields)


def _profile(**overrides) -> UserProfile:
    fields = {
        "user_credentials_id": "user-1",
        "first_name": "Ana",
        "last_name": "Lopez",
        "address_one": "12 Elm St",
        "city": "Austin",
        "state": "TX",
        "zip_code": "73301",
    }
    fields.update(overrides)
    return UserProfile(**fields)


class TestEvent:
    """Event construction and mutation."""

    def test_valid_event_sets_fields(self):
        event = _event()
        assert event.id and len(event.id) == 32
        assert event.name == "Park Cleanup"
        assert event.urgency == EventUrgency.HIGH
        assert event.required_skills == [VolunteerSkill.CLEANING]
        assert event.date_utc.tzinfo == timezone.utc

    def test_naive_date_is_taken_as_utc(self):
        event = _event(date_utc=datetime(2026, 5, 1, 15, 0))
        assert event.date_utc == datetime(2026, 5, 1, 15, 0, tzinfo=timezone.utc)

    def test_aware_date_is_converted_to_utc(self):
        offset = timezone(timedelta(hours=-5))
        event = _event(date_utc=datetime(2026, 5, 1, 10, 0, tzinfo=offset))
        assert event.date_utc == datetime(2026, 5, 1, 15, 0, tzinfo=timezone.utc)
        assert event.date_utc.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("field", ["name", "description", "location"])
    @pytest.mark.parametrize("bad", [None, "", "   "])
    def test_blank_text_is_rejected_with_param(self, field, bad):
        with pytest.raises(DomainValidationError) as exc_info:
            _event(**{field: bad})
        assert exc_info.value.param == field

    def test_missing_date_is_rejected(self):
        with pytest.raises(DomainValidationError) as exc_info:
            _event(date_utc=None)
        assert exc_info.value.param == "date_utc"

    def test_domain_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            _event(name="")

    def test_duplicate_skills_are_deduplicated_in_order(self):
        event = _event(required_skills=[
            VolunteerSkill.MARKETING,
            VolunteerSkill.COOKING,
            VolunteerSkill.MARKETING,
        ])
        assert event.required_skills == [VolunteerSkill.MARKETING, VolunteerSkill.COOKING]

    def test_none_skills_become_empty(self):
        assert _event(required_skills=None).required_skills == []

    def test_skill_list_is_copied(self):
        skills = [VolunteerSkill.DRIVING]
        event = _event(required_skills=skills)
        skills.append(VolunteerSkill.COOKING)
        assert event.required_skills == [VolunteerSkill.DRIVING]

    def test_update_details_rejects_blank_and_keeps_values(self):
        event = _event()
        with pytest.raises(DomainValidationError) as exc_info:
            event.update_details(name="New", description=" ", location="There", urgency=EventUrgency.LOW)
        assert exc_info.value.param == "description"
        assert event.name == "Park Cleanup"

    def test_update_details_and_reschedule(self):
        event = _event()
        event.update_details(name="New", description="Desc", location="There", urgency=EventUrgency.LOW)
        event.reschedule(datetime(2027, 1, 2, 3, 4))
        assert (event.name, event.description, event.location) == ("New", "Desc", "There")
        assert event.urgency == EventUrgency.LOW
        assert event.date_utc == datetime(2027, 1, 2, 3, 4, tzinfo=timezone.utc)

    def test_set_required_skills_replaces_set(self):
        event = _event()
        event.set_required_skills([VolunteerSkill.TEACHING, VolunteerSkill.TEACHING])
        assert event.required_skills == [VolunteerSkill.TEACHING]
        event.set_required_skills(None)
        assert event.required_skills == []


class TestUserProfile:
    """UserProfile construction and update_profile."""

    def test_valid_profile_defaults(self):
        profile = _profile()
        assert profile.id == "user-1"
        assert profile.user_credentials_id == "user-1"
        assert profile.preferences == ""
        assert profile.skills == []
        assert profile.availability == []
        assert profile.address_two is None

    @pytest.mark.parametrize(
        "field",
        ["user_credentials_id", "first_name", "last_name", "address_one", "city", "state", "zip_code"],
    )
    def test_required_fields_are_validated(self, field):
        with pytest.raises(DomainValidationError) as exc_info:
            _profile(**{field: "  "})
        assert exc_info.value.param == field

    def test_availability_filters_blanks_and_duplicates(self):
        profile = _profile(availability=["Weekends", " ", "", "Weekends", "Evenings", None])
        assert profile.availability == ["Weekends", "Evenings"]

    def test_skills_deduplicated(self):
        profile = _profile(skills=[VolunteerSkill.COOKING, VolunteerSkill.COOKING, VolunteerSkill.DRIVING])
        assert profile.skills == [VolunteerSkill.COOKING, VolunteerSkill.DRIVING]

    def test_update_profile_revalidates_required_fields(self):
        profile = _profile()
        with pytest.raises(DomainValidationError) as exc_info:
            profile.update_profile(
                first_name="Ana",
                last_name=None,
                address_one="12 Elm St",
                address_two=None,
                city="Austin",
                state="TX",
                zip_code="73301",
                preferences=None,
                skills=None,
                availability=None,
            )
        assert exc_info.value.param == "last_name"
        assert profile.last_name == "Lopez"

    def test_update_profile_null_preferences_becomes_empty(self):
        profile = _profile(preferences="Mornings")
        profile.update_profile(
            first_name="Ana",
            last_name="Lopez",
            address_one="12 Elm St",
            address_two="Apt 4",
            city="Austin",
            state="TX",
            zip_code="73301",
            preferences=None,
            skills=[VolunteerSkill.WRITING],
            availability=["Mondays"],
        )
        assert profile.preferences == ""
        assert profile.address_two == "Apt 4"
        assert profile.skills == [VolunteerSkill.WRITING]
        assert profile.availability == ["Mondays"]


class TestVolunteerHistory:
    """VolunteerHistory invariants."""

    def test_valid_history(self):
        history = VolunteerHistory("u1", "e1", datetime(2026, 1, 1), 90)
        assert history.duration_minutes == 90
        assert history.date_utc.tzinfo == timezone.utc
        assert history.created_at_utc.tzinfo == timezone.utc

    @pytest.mark.parametrize("duration", [0, -5, None])
    def test_non_positive_duration_is_rejected(self, duration):
        with pytest.raises(DomainValidationError) as exc_info:
            VolunteerHistory("u1", "e1", datetime(2026, 1, 1), duration)
        assert exc_info.value.param == "duration_minutes"

    def test_update_duration_validates(self):
        history = VolunteerHistory("u1", "e1", datetime(2026, 1, 1), 30)
        history.update_duration(45)
        assert history.duration_minutes == 45
        with pytest.raises(DomainValidationError):
            history.update_duration(0)
        assert history.duration_minutes == 45

    @pytest.mark.parametrize("field", ["user_id", "event_id"])
    def test_ids_required(self, field):
        args = {"user_id": "u1", "event_id": "e1", "date_utc": datetime(2026, 1, 1), "duration_minutes": 30}
        args[field] = ""
        with pytest.raises(DomainValidationError) as exc_info:
            VolunteerHistory(**args)
        assert exc_info.value.param == field


class TestNotificationAndCredentials:
    """Notification and UserCredentials behaviour."""

    def test_notification_defaults(self):
        before = datetime.now(timezone.utc)
        notification = Notification("u1", "Hello")
        assert notification.read is False
        assert notification.created_at >= before

    def test_notification_requires_message(self):
        with pytest.raises(DomainValidationError) as exc_info:
            Notification("u1", "   ")
        assert exc_info.value.param == "message"

    def test_mark_as_read_is_idempotent(self):
        notification = Notification("u1", "Hello")
        notification.mark_as_read()
        notification.mark_as_read()
        assert notification.read is True

    def test_credentials_default_role_and_normalized_email(self):
        credentials = UserCredentials("  Someone@Example.COM ", "hash")
        assert credentials.role == UserRole.VOLUNTEER
        assert credentials.email == "someone@example.com"

    def test_credentials_change_role_and_password(self):
        credentials = UserCredentials("a@b.com", "hash")
        credentials.change_role(UserRole.ADMIN)
        credentials.set_password_hash("other")
        assert credentials.role == UserRole.ADMIN
        assert credentials.password_hash == "other"
        with pytest.raises(DomainValidationError):
            credentials.set_password_hash("")


class TestPersistenceRoundTrip:
    """Stored values come back as UTC-aware datetimes and enum members."""

    def test_event_round_trip(self, db_session):
        event = _event(required_skills=[VolunteerSkill.IT_SUPPORT, VolunteerSkill.COOKING])
        db_session.add(event)
        db_session.commit()
        db_session.expire_all()

        loaded = db_session.query(Event).filter(Event.id == event.id).one()
        assert loaded.date_utc == datetime(2026, 5, 1, 15, 0, tzinfo=timezone.utc)
        assert loaded.date_utc.tzinfo is not None
        assert loaded.urgency is EventUrgency.HIGH
        assert loaded.required_skills == [VolunteerSkill.IT_SUPPORT, VolunteerSkill.COOKING]

    def test_history_unique_per_user_and_event(self, db_session, volunteer, make_event):
        from sqlalchemy.exc import IntegrityError

        event = make_event()
        db_session.add(VolunteerHistory(volunteer.id, event.id, event.date_utc, 60))
        db_session.commit()

        db_session.add(VolunteerHistory(volunteer.id, event.id, event.date_utc, 30))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
