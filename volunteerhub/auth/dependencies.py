"""FastAPI dependencies for authentication and authorization."""

from typing import Dict, Optional
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from volunteerhub.database.database import get_db
from volunteerhub.database.user_read_store import UserReadStore
from volunteerhub.auth.authorization import AdminRequirementHandler, UserRequirementHandler
from volunteerhub.auth.context import RequestContext
from volunteerhub.auth.jwt import decode_access_token
from volunteerhub.models.constants import AUTH_COOKIE_NAME

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_token_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Optional[Dict]:
    """Decode the caller's JWT from the Authorization header or the auth cookie.

    Returns None when no valid token is present.
    """
    token = credentials.credentials if credentials else request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        return None
    return decode_access_token(token)


def get_current_claims(claims: Optional[Dict] = Depends(get_token_claims)) -> Dict:
    """Claims of an authenticated caller.

    Raises:
        HTTPException: 401 if the token is missing, invalid or has no subject
    """
    if not claims or not str(claims.get("sub") or "").strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def get_current_subject(claims: Dict = Depends(get_current_claims)) -> str:
    return claims["sub"]


def get_request_context(
    response: Response,
    claims: Optional[Dict] = Depends(get_token_claims),
) -> RequestContext:
    claims = claims or {}
    return RequestContext(
        subject_id=claims.get("sub"),
        email=claims.get("email"),
        role=claims.get("role"),
        response=response,
    )


def require_admin(
    claims: Dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> str:
    """Subject id of an Admin caller; 403 otherwise."""
    if not AdminRequirementHandler(UserReadStore(db)).handle(claims):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return claims["sub"]


def require_user(
    claims: Dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> str:
    """Subject id of a caller accepted by the user policy; 403 otherwise."""
    if not UserRequirementHandler(UserReadStore(db)).handle(claims):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return claims["sub"]
