# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .profile_service import ProfileService
from .schedule_service import ScheduleService, is_editable
from .reference_service import ReferenceService
from .image_service import ImageService
from .export_service import ExportService, Sharer, SharedFile

__all__ = [
    "ProfileService",
    "ScheduleService",
    "is_editable",
    "ReferenceService",
    "ImageService",
    "ExportService",
    "Sharer",
    "SharedFile",
]
