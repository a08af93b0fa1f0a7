"""
Sessionvault API data models.

These models define the request and response bodies of the REST API.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..session import Session


class PutValueRequest(BaseModel):
    """Request to store one value in the current session."""

    value: Any = Field(..., description="JSON-compatible value to store")


class SessionResponse(BaseModel):
    """Response with session details."""

    session_id: str
    expires_at: datetime
    values: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            session_id=session.id,
            expires_at=session.expires_at,
            values=session.value or {},
        )


class ValueResponse(BaseModel):
    """Response with a single session value."""

    key: str
    value: Optional[Any] = None
