# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# Handles the owner's profile (read/save), slug availability and the public
# read-by-slug path.
#
# Write path ordering for save_profile():
#   1. normalize the slug
#   2. reject short slugs and slugs held by another user (no write yet)
#   3. update the owner's row if it exists, otherwise insert it
# The unique constraint on profiles.slug has the final word: a 23505 from
# step 3 means someone took the slug in between and surfaces as SLUG_TAKEN.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.exceptions import ProfileNotFoundError, SlugTakenError, SlugTooShortError
from core.models.profile import Profile, ProfileUpdate, PublicProfile, SlugCheckResponse
from lib.slugs import SLUG_MIN_LENGTH, SlugAvailability, is_checkable, normalize_slug
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.theme import background_columns

logger = logging.getLogger(__name__)

TABLE = "profiles"


class ProfileService:
    """
    Service for Catholic profile operations.

    Owner operations are keyed by the authenticated user id; the public
    lookup is keyed by slug and never filters on ownership.
    """

    @staticmethod
    def get_my_profile(user_id: UUID | str) -> Profile:
        """
        Get the profile owned by a user.

        Raises:
            ProfileNotFoundError: If the user hasn't saved a profile yet
        """
        row = SupabaseClient.fetch_one(TABLE, eq={"user_id": str(user_id)})
        if not row:
            raise ProfileNotFoundError()
        return Profile.from_row(row)

    @staticmethod
    def check_slug_availability(candidate: str, user_id: UUID | str) -> SlugCheckResponse:
        """
        Check whether a slug is free for this user.

        The candidate is normalized first. Anything shorter than the minimum
        length is reported as unknown without querying the table.

        Args:
            candidate: Raw text as typed
            user_id: The caller; their own row never counts as "taken"

        Returns:
            SlugCheckResponse with the normalized slug and its status
        """
        slug = normalize_slug(candidate)
        if not is_checkable(slug):
            return SlugCheckResponse(slug=slug, status=SlugAvailability.UNKNOWN)

        row = SupabaseClient.fetch_one(
            TABLE,
            columns="slug",
            eq={"slug": slug},
            neq={"user_id": str(user_id)},
        )
        status = SlugAvailability.TAKEN if row else SlugAvailability.AVAILABLE
        return SlugCheckResponse(slug=slug, status=status)

    @staticmethod
    def save_profile(user_id: UUID | str, update: ProfileUpdate) -> Profile:
        """
        Create or update the user's profile.

        Args:
            user_id: Owner (from the session)
            update: Full editor payload

        Returns:
            The stored profile

        Raises:
            SlugTooShortError: Normalized slug below the minimum length
            SlugTakenError: Slug held by another user (checked or from 23505)
            SupabaseClientError: Any other table failure
        """
        slug = normalize_slug(update.slug)
        if not is_checkable(slug):
            logger.warning(f"Rejected profile save for {user_id}: slug too short ({slug!r})")
            raise SlugTooShortError(slug, SLUG_MIN_LENGTH)

        check = ProfileService.check_slug_availability(slug, user_id)
        if check.status == SlugAvailability.TAKEN:
            logger.warning(f"Rejected profile save for {user_id}: slug {slug!r} taken")
            raise SlugTakenError(slug)

        values = _profile_columns(update, slug)
        existing = SupabaseClient.fetch_one(TABLE, columns="id", eq={"user_id": str(user_id)})

        try:
            if existing:
                values["updated_at"] = datetime.now(timezone.utc).isoformat()
                rows = SupabaseClient.update_rows(TABLE, values, eq={"user_id": str(user_id)})
                logger.info(f"Updated profile {existing['id']} for user {user_id}")
            else:
                values["user_id"] = str(user_id)
                rows = SupabaseClient.insert_rows(TABLE, values)
                logger.info(f"Created profile for user {user_id} with slug {slug!r}")

        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.warning(f"Slug {slug!r} lost to a concurrent save")
                raise SlugTakenError(slug) from e
            logger.error(f"Failed to save profile for {user_id}: {e.message}")
            raise

        if not rows:
            # PostgREST didn't return the representation; read it back
            return ProfileService.get_my_profile(user_id)
        return Profile.from_row(rows[0])

    @staticmethod
    def get_profile_by_slug(slug: str) -> Profile:
        """
        Look up a profile by slug, regardless of owner.

        Raises:
            ProfileNotFoundError: If no profile holds the slug
        """
        row = SupabaseClient.fetch_one(TABLE, eq={"slug": slug})
        if not row:
            raise ProfileNotFoundError(slug)
        return Profile.from_row(row)

    @staticmethod
    def get_public_profile(slug: str) -> PublicProfile:
        """Read-only public view of the profile at /p/<slug>."""
        return PublicProfile.from_profile(ProfileService.get_profile_by_slug(slug))


def _profile_columns(update: ProfileUpdate, slug: str) -> dict[str, Any]:
    """Flatten the editor payload into profiles columns."""
    values = update.model_dump(mode="json", exclude={"background", "music_embeds"})
    values["slug"] = slug
    values.update(background_columns(update.background))
    values["music_embeds"] = [embed.to_row() for embed in update.music_embeds]
    return values
