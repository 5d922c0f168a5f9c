"""Read-only range queries used by the report handlers."""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import exists
from sqlalchemy.orm import Session, joinedload

from volunteerhub.database.models import Event, UserCredentials, VolunteerHistory
from volunteerhub.models.dates import ensure_utc


class VolunteerReportingRepository:
    """Loads histories and events for report generation.

    Both bounds are optional and inclusive.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_volunteer_histories(
        self,
        from_utc: Optional[datetime] = None,
        to_utc: Optional[datetime] = None,
    ) -> List[VolunteerHistory]:
        """Histories by participation date, with user, profile and event loaded."""
        query = self.db.query(VolunteerHistory).options(
            joinedload(VolunteerHistory.user).joinedload(UserCredentials.profile),
            joinedload(VolunteerHistory.event),
        )
        if from_utc is not None:
            query = query.filter(VolunteerHistory.date_utc >= ensure_utc(from_utc))
        if to_utc is not None:
            query = query.filter(VolunteerHistory.date_utc <= ensure_utc(to_utc))
        return query.order_by(VolunteerHistory.date_utc, VolunteerHistory.user_id).all()

    def get_events_scheduled(
        self,
        from_utc: Optional[datetime] = None,
        to_utc: Optional[datetime] = None,
        without_history: bool = False,
    ) -> List[Event]:
        """Events whose own date falls in the range, ordered by (date, name).

        With ``without_history`` only events that have no history at all are
        returned, whatever the participation dates of that history.
        """
        query = self.db.query(Event)
        if without_history:
            query = query.filter(~exists().where(VolunteerHistory.event_id == Event.id))
        if from_utc is not None:
            query = query.filter(Event.date_utc >= ensure_utc(from_utc))
        if to_utc is not None:
            query = query.filter(Event.date_utc <= ensure_utc(to_utc))
        return query.order_by(Event.date_utc, Event.name).all()
