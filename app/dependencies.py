# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services.export_service import Sharer


def get_sharer(request: Request) -> Sharer | None:
    """
    Native share target configured on the app, if any.

    Deployments that bridge to a messaging service set `app.state.sharer`;
    without one, shares fall back to returning the image inline.
    """
    return getattr(request.app.state, "sharer", None)


# Type alias for dependency injection
SharerDep = Annotated[Sharer | None, Depends(get_sharer)]
