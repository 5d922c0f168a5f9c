"""Signup, login and logout."""

import logging
from sqlalchemy.orm import Session

from volunteerhub.auth.context import RequestContext
from volunteerhub.auth.cookies import clear_auth_cookie, set_auth_cookie
from volunteerhub.auth.jwt import create_access_token
from volunteerhub.auth.passwords import hash_password, verify_password
from volunteerhub.database.models import Notification, UserCredentials
from volunteerhub.database.repository import credentials_repository, notification_repository
from volunteerhub.exceptions import InvalidCredentialsError, OperationFailedError, RequestValidationError
from volunteerhub.models.constants import WELCOME_MESSAGE
from volunteerhub.models.dtos import AuthResponse

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _issue_session(context: RequestContext, credentials: UserCredentials) -> AuthResponse:
    response = context.require_response()
    token = create_access_token(credentials.id, credentials.email, credentials.role.value)
    set_auth_cookie(response, token)
    return AuthResponse(id=credentials.id, email=credentials.email, role=credentials.role)


def signup(db: Session, context: RequestContext, email: str, password: str) -> AuthResponse:
    """Create a Volunteer account with a welcome notification and sign it in.

    Raises:
        OperationFailedError: If the email is already registered
    """
    email = normalize_email(email)
    credentials_repo = credentials_repository(db)

    if credentials_repo.get(UserCredentials.email == email) is not None:
        raise OperationFailedError("A user with this email already exists.", "DUPLICATE_EMAIL")

    # Fail before anything is staged if the response is unavailable.
    context.require_response()

    try:
        password_hash = hash_password(password)
    except ValueError as e:
        raise RequestValidationError(str(e))

    credentials = UserCredentials(email=email, password_hash=password_hash)
    credentials_repo.queue_insert(credentials)
    notification_repository(db).queue_insert(Notification(credentials.id, WELCOME_MESSAGE))
    credentials_repo.save()

    logger.info(f"Signed up user {credentials.id}")
    return _issue_session(context, credentials)


def login(db: Session, context: RequestContext, email: str, password: str) -> AuthResponse:
    """Verify credentials and sign the user in.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    credentials = credentials_repository(db).get(UserCredentials.email == normalize_email(email))
    if credentials is None or not verify_password(password, credentials.password_hash):
        logger.info("Rejected login attempt")
        raise InvalidCredentialsError()

    logger.info(f"Logged in user {credentials.id}")
    return _issue_session(context, credentials)


def logout(context: RequestContext) -> None:
    clear_auth_cookie(context.require_response())
    logger.info(f"Logged out user {context.subject_id}")
