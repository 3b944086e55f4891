# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - profiles.py: The signed-in user's profile, slug check, wallet card
# - public.py: /p/{slug} and /escalas-publicas (no authentication)
# - schedules.py: Liturgical schedule management and exports
# - references.py: Communities, people and liturgical roles
# - embeds.py: Music embed resolver and gradient helpers
# - images.py: Profile image uploads
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import profiles
from . import public
from . import schedules
from . import references
from . import embeds
from . import images

__all__ = [
    "health",
    "profiles",
    "public",
    "schedules",
    "references",
    "embeds",
    "images",
]
