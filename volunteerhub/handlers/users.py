"""Current-user profile read and partial update."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from volunteerhub.database.models import UserCredentials, UserProfile
from volunteerhub.database.repository import credentials_repository, profile_repository
from volunteerhub.exceptions import OperationFailedError, RequestValidationError
from volunteerhub.models.dtos import UserDto
from volunteerhub.models.enums import parse_skills
from volunteerhub.models.mappers import user_to_dto
from volunteerhub.models.requests import ProfilePatch

logger = logging.getLogger(__name__)

_REQUIRED_FOR_CREATE = ("first_name", "last_name", "address_one", "city", "state", "zip_code")


def get_current_user(db: Session, user_id: str) -> Optional[UserDto]:
    """Credentials plus profile of a user, or None if the user does not exist."""
    credentials = credentials_repository(db).get(UserCredentials.id == user_id)
    if credentials is None:
        return None
    profile = profile_repository(db).get(UserProfile.user_credentials_id == user_id)
    return user_to_dto(credentials, profile)


def _merged(patch: ProfilePatch, name: str, current):
    # Absent and null both keep the current value.
    if not patch.has_value(name):
        return current
    return getattr(patch, name)


def update_user(db: Session, user_id: str, patch: ProfilePatch) -> UserDto:
    """Create or patch the caller's profile.

    Fields absent from the patch, or set to null, keep their current value.
    Optional fields are cleared with an empty value ("" or []). Without an
    existing profile every required field must be supplied.

    Raises:
        OperationFailedError: If the user does not exist
        RequestValidationError: If a skill cannot be parsed or required fields are missing
        DomainValidationError: If the merged profile breaks an entity invariant
    """
    credentials = credentials_repository(db).get(UserCredentials.id == user_id)
    if credentials is None:
        raise OperationFailedError("User not found.", "USER_NOT_FOUND")

    skills = None
    if patch.has_value("skills"):
        skills_result = parse_skills(patch.skills)
        if not skills_result.ok:
            raise RequestValidationError(skills_result.error, {"field": "skills"})
        skills = skills_result.value

    profiles = profile_repository(db)
    profile = profiles.get(UserProfile.user_credentials_id == user_id)

    if profile is None:
        if not all(patch.has_value(name) for name in _REQUIRED_FOR_CREATE):
            raise RequestValidationError("Cannot create profile: missing required fields.")

        profile = UserProfile(
            user_credentials_id=credentials.id,
            first_name=patch.first_name,
            last_name=patch.last_name,
            address_one=patch.address_one,
            address_two=_merged(patch, "address_two", None),
            city=patch.city,
            state=patch.state,
            zip_code=patch.zip_code,
            preferences=_merged(patch, "preferences", ""),
            skills=skills or [],
            availability=_merged(patch, "availability", []),
        )
        profiles.queue_insert(profile)
    else:
        profile.update_profile(
            first_name=_merged(patch, "first_name", profile.first_name),
            last_name=_merged(patch, "last_name", profile.last_name),
            address_one=_merged(patch, "address_one", profile.address_one),
            address_two=_merged(patch, "address_two", profile.address_two),
            city=_merged(patch, "city", profile.city),
            state=_merged(patch, "state", profile.state),
            zip_code=_merged(patch, "zip_code", profile.zip_code),
            preferences=_merged(patch, "preferences", profile.preferences),
            skills=skills if skills is not None else profile.skills,
            availability=_merged(patch, "availability", profile.availability),
        )

    profiles.save()
    supplied = [name for name in ProfilePatch.field_names() if patch.supplied(name)]
    logger.debug(f"Updated profile for user {user_id}: {', '.join(supplied) or 'no fields'}")
    return user_to_dto(credentials, profile)
