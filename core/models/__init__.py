# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - profile.py: Catholic profile (owner view, public view, slug check)
# - schedule.py: Liturgical schedules and their rosters
# - reference.py: Communities, people and liturgical roles
# - media.py: Image uploads and card sharing
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Profile Models
# -----------------------------------------------------------------------------
from .profile import (
    Profile,
    ProfileUpdate,
    PublicProfile,
    SlugCheckResponse,
)

# -----------------------------------------------------------------------------
# Schedule Models
# -----------------------------------------------------------------------------
from .schedule import (
    TIME_SLOTS,
    ParticipantIn,
    ParticipantView,
    PublicParticipant,
    PublicSchedule,
    PublicScheduleList,
    ScheduleCreate,
    ScheduleEdit,
    ScheduleView,
)

# -----------------------------------------------------------------------------
# Reference Models
# -----------------------------------------------------------------------------
from .reference import (
    Community,
    LiturgicalRole,
    Person,
    RoleCreate,
)

# -----------------------------------------------------------------------------
# Media Models
# -----------------------------------------------------------------------------
from .media import (
    IMAGE_FOLDERS,
    ImageSlot,
    ShareMethod,
    ShareResult,
    UploadedImage,
)

__all__ = [
    # Profile
    "Profile",
    "ProfileUpdate",
    "PublicProfile",
    "SlugCheckResponse",
    # Schedule
    "TIME_SLOTS",
    "ParticipantIn",
    "ParticipantView",
    "PublicParticipant",
    "PublicSchedule",
    "PublicScheduleList",
    "ScheduleCreate",
    "ScheduleEdit",
    "ScheduleView",
    # Reference
    "Community",
    "LiturgicalRole",
    "Person",
    "RoleCreate",
    # Media
    "IMAGE_FOLDERS",
    "ImageSlot",
    "ShareMethod",
    "ShareResult",
    "UploadedImage",
]
