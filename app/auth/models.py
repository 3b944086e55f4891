# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str | None = None


class SessionState(str, Enum):
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"


class SessionContext(BaseModel):
    """
    Explicit session for one request.

    Handlers that behave differently for visitors and owners take this
    instead of reaching for a global "current user".
    """
    model_config = ConfigDict(frozen=True)

    state: SessionState
    user: AuthUser | None = None

    @classmethod
    def signed_in(cls, user: AuthUser) -> "SessionContext":
        return cls(state=SessionState.SIGNED_IN, user=user)

    @classmethod
    def signed_out(cls) -> "SessionContext":
        return cls(state=SessionState.SIGNED_OUT)

    @property
    def is_signed_in(self) -> bool:
        return self.state == SessionState.SIGNED_IN
