"""FastAPI web application for Volunteer Hub."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from volunteerhub import handlers
from volunteerhub.api.schemas import ErrorResponse, HealthResponse, MarkAllReadResponse
from volunteerhub.auth.context import RequestContext
from volunteerhub.auth.dependencies import (
    get_current_subject,
    get_request_context,
    require_admin,
    require_user,
)
from volunteerhub.database.database import get_db, init_db
from volunteerhub.exceptions import RequestValidationError, VolunteerHubError
from volunteerhub.models.dtos import (
    AssignmentResult,
    AuthResponse,
    EventDto,
    FileReportResult,
    NotificationDto,
    UserDto,
    VolunteerDto,
    VolunteerHistoryDto,
)
from volunteerhub.models.requests import (
    AssignVolunteerRequest,
    LoginRequest,
    SignupRequest,
    UpdateUserRequest,
    UpsertEventRequest,
)

load_dotenv()

logger = logging.getLogger(__name__)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,https://localhost:3000,http://localhost:7292,https://localhost:7292",
    ).split(",")
    if origin.strip()
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Volunteer Hub API",
    description="Volunteer sign-up, event assignment, notifications and activity reports",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VolunteerHubError)
async def volunteer_hub_error_handler(request: Request, exc: VolunteerHubError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    body = ErrorResponse(detail=exc.message, error_code=exc.error_code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def _file_response(result: FileReportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return HealthResponse()


# --- auth -------------------------------------------------------------------


@app.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    return handlers.login(db, context, request.email, request.password)


@app.post("/signup", response_model=AuthResponse)
def signup(
    request: SignupRequest,
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    return handlers.signup(db, context, request.email, request.password)


@app.post("/logout")
def logout(
    user_id: str = Depends(get_current_subject),
    context: RequestContext = Depends(get_request_context),
):
    handlers.logout(context)
    return {"status": "ok"}


# --- events -----------------------------------------------------------------


@app.get("/events/upcoming", response_model=List[EventDto])
def get_upcoming_events(db: Session = Depends(get_db)):
    return handlers.get_upcoming_events(db)


@app.get("/events/history", response_model=List[VolunteerHistoryDto])
def get_volunteer_history(
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    return handlers.get_volunteer_history_for_user(db, user_id)


@app.post("/events", response_model=EventDto)
def create_event(
    request: UpsertEventRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return handlers.upsert_event(
        db,
        event_id=None,
        name=request.name,
        description=request.description,
        location=request.location,
        date_utc=request.date_utc,
        urgency=request.urgency,
        required_skills=request.required_skills,
    )


@app.put("/events/{event_id}", response_model=EventDto)
def update_event(
    event_id: str,
    request: UpsertEventRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return handlers.upsert_event(
        db,
        event_id=event_id,
        name=request.name,
        description=request.description,
        location=request.location,
        date_utc=request.date_utc,
        urgency=request.urgency,
        required_skills=request.required_skills,
    )


@app.post("/events/{event_id}/assign-volunteer", response_model=AssignmentResult)
def assign_volunteer(
    event_id: str,
    request: AssignVolunteerRequest,
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not request.volunteer_id or not request.volunteer_id.strip():
        raise RequestValidationError("VolunteerId is required.", {"field": "volunteerId"})

    result = handlers.assign_volunteer_to_event(
        db,
        event_id=event_id,
        volunteer_id=request.volunteer_id,
        duration_minutes=request.duration_minutes,
    )
    if result is None:
        raise HTTPException(status_code=404, detail="Event or volunteer not found")
    return result


@app.get("/events/{event_id}/assignments", response_model=List[str])
def get_assigned_volunteers(
    event_id: str,
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    return handlers.get_assigned_volunteer_ids(db, event_id)


# --- notifications ----------------------------------------------------------


@app.get("/notifications", response_model=List[NotificationDto])
def get_notifications(
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    return handlers.get_notifications_for_user(db, user_id)


@app.post("/notifications/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    return MarkAllReadResponse(updated=handlers.mark_all_notifications_read(db, user_id))


# --- reports ----------------------------------------------------------------


@app.get("/reports/volunteers")
def get_volunteer_activity_report(
    from_utc: Optional[datetime] = Query(None, alias="fromUtc"),
    to_utc: Optional[datetime] = Query(None, alias="toUtc"),
    report_format: Optional[str] = Query("csv", alias="format"),
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    result = handlers.get_volunteer_activity_report(
        db, from_utc, to_utc, handlers.parse_report_format(report_format)
    )
    return _file_response(result)


@app.get("/reports/events")
def get_event_assignments_report(
    from_utc: Optional[datetime] = Query(None, alias="fromUtc"),
    to_utc: Optional[datetime] = Query(None, alias="toUtc"),
    report_format: Optional[str] = Query("csv", alias="format"),
    admin_id: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    result = handlers.get_event_assignments_report(
        db, from_utc, to_utc, handlers.parse_report_format(report_format)
    )
    return _file_response(result)


# --- user -------------------------------------------------------------------


@app.get("/user", response_model=UserDto)
def get_me(
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    user = handlers.get_current_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.put("/user", response_model=UserDto)
def update_me(
    request: UpdateUserRequest,
    user_id: str = Depends(get_current_subject),
    db: Session = Depends(get_db),
):
    return handlers.update_user(db, user_id, request.to_patch())


# --- matching ---------------------------------------------------------------


@app.get("/matching/volunteers", response_model=List[VolunteerDto])
def get_volunteers_for_matching(
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    return handlers.get_volunteers_for_matching(db)


@app.get("/matching/events", response_model=List[EventDto])
def get_events_for_matching(
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    return handlers.get_events_for_matching(db)
