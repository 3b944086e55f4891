# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for profiles, schedules and reference data
# - services/: Profile, schedule, reference, image and export operations
#
# Services raise CarteiraException subclasses; routers only translate HTTP
# in and out.
# =============================================================================
