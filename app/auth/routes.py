# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up and login happen client-side against Supabase Auth.
# These routes only report what the server sees for the current token.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user, get_session_context
from app.auth.models import AuthUser, SessionContext

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/session", response_model=SessionContext)
async def get_session(
    session: SessionContext = Depends(get_session_context)
) -> SessionContext:
    """
    Current session state.

    Never fails: a missing or invalid token yields `signed_out`.
    """
    return session


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
