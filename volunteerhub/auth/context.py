"""Per-request caller context passed explicitly into handlers."""

from dataclasses import dataclass
from typing import Optional
from fastapi import Response

from volunteerhub.exceptions import ContextUnavailableError


@dataclass
class RequestContext:
    """Authenticated subject (if any) plus the response used for cookie writes."""

    subject_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    response: Optional[Response] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.subject_id and self.subject_id.strip())

    def require_response(self) -> Response:
        if self.response is None:
            raise ContextUnavailableError()
        return self.response
