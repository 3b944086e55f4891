# =============================================================================
# tests/test_profile_service.py - Profile Service Tests
# =============================================================================
# Covers slug availability, the save guard (short/taken/unique violation),
# create-vs-update, and the public read-by-slug view.
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import ProfileNotFoundError, SlugTakenError, SlugTooShortError
from core.models.profile import ProfileUpdate
from core.services.profile_service import ProfileService
from lib.slugs import SlugAvailability
from lib.supabase_client import SupabaseClient, SupabaseClientError, UNIQUE_VIOLATION
from lib.theme import ImageBackground


def _update(**overrides) -> ProfileUpdate:
    data = {"slug": "São João", "full_name": "João da Silva"}
    data.update(overrides)
    return ProfileUpdate.model_validate(data)


# =============================================================================
# Slug Availability
# =============================================================================

class TestCheckSlugAvailability:
    """Test ProfileService.check_slug_availability()."""

    def test_short_candidate_is_unknown_without_query(self, fake_db, user_id):
        result = ProfileService.check_slug_availability("á!", user_id)

        assert result.status == SlugAvailability.UNKNOWN
        assert result.slug == "a"
        assert fake_db.calls == []

    def test_available(self, fake_db, user_id):
        result = ProfileService.check_slug_availability("São João", user_id)

        assert result.slug == "sao-joao"
        assert result.status == SlugAvailability.AVAILABLE

    def test_taken_by_other_user(self, fake_db, user_id, other_user_id):
        fake_db.seed("profiles", {"user_id": other_user_id, "slug": "sao-joao"})

        result = ProfileService.check_slug_availability("sao joao", user_id)

        assert result.status == SlugAvailability.TAKEN

    def test_own_slug_is_available(self, fake_db, user_id):
        fake_db.seed("profiles", {"user_id": user_id, "slug": "sao-joao"})

        result = ProfileService.check_slug_availability("sao-joao", user_id)

        assert result.status == SlugAvailability.AVAILABLE


# =============================================================================
# Save
# =============================================================================

class TestSaveProfile:
    """Test ProfileService.save_profile()."""

    def test_creates_on_first_save(self, fake_db, user_id):
        profile = ProfileService.save_profile(user_id, _update())

        rows = fake_db.rows("profiles")
        assert len(rows) == 1
        assert rows[0]["user_id"] == user_id
        assert rows[0]["slug"] == "sao-joao"
        assert rows[0]["background_type"] == "gradient"
        assert profile.slug == "sao-joao"
        assert str(profile.user_id) == user_id

    def test_updates_existing(self, fake_db, user_id):
        ProfileService.save_profile(user_id, _update())
        profile = ProfileService.save_profile(user_id, _update(slug="joao-batista", parish="Sé"))

        rows = fake_db.rows("profiles")
        assert len(rows) == 1
        assert rows[0]["slug"] == "joao-batista"
        assert rows[0]["updated_at"] is not None
        assert profile.parish == "Sé"

    def test_short_slug_rejected_before_write(self, fake_db, user_id):
        with pytest.raises(SlugTooShortError) as exc:
            ProfileService.save_profile(user_id, _update(slug="ab"))

        assert exc.value.status_code == 400
        assert fake_db.writes() == []

    def test_taken_slug_rejected_before_write(self, fake_db, user_id, other_user_id):
        fake_db.seed("profiles", {"user_id": other_user_id, "slug": "sao-joao"})

        with pytest.raises(SlugTakenError) as exc:
            ProfileService.save_profile(user_id, _update())

        assert exc.value.status_code == 409
        assert exc.value.message == "Este link já está em uso. Escolha outro."
        assert fake_db.writes() == []

    def test_unique_violation_maps_to_slug_taken(self, fake_db, user_id):
        error = SupabaseClientError("duplicate key", code="INSERT_FAILED", pg_code=UNIQUE_VIOLATION)

        with patch.object(SupabaseClient, "insert_rows", side_effect=error) as insert:
            with pytest.raises(SlugTakenError):
                ProfileService.save_profile(user_id, _update())

        # never retried
        assert insert.call_count == 1

    def test_other_write_errors_propagate(self, fake_db, user_id):
        fake_db.fail_on("profiles", "insert", code="42501")

        with pytest.raises(SupabaseClientError) as exc:
            ProfileService.save_profile(user_id, _update())

        assert exc.value.code == "INSERT_FAILED"
        assert not exc.value.is_unique_violation

    def test_background_and_embeds_stored_as_columns(self, fake_db, user_id):
        update = _update(
            background={"kind": "image", "url": "https://res.cloudinary.com/bg.jpg", "overlay_opacity": 0.6},
            music_embeds=[{"type": "youtube", "url": "https://youtu.be/dQw4w9WgXcQ", "title": "Hino"}],
        )

        profile = ProfileService.save_profile(user_id, update)

        row = fake_db.rows("profiles")[0]
        assert row["background_type"] == "image"
        assert row["background_overlay_opacity"] == 0.6
        assert row["music_embeds"] == [
            {"type": "youtube", "url": "https://youtu.be/dQw4w9WgXcQ", "title": "Hino"}
        ]
        assert isinstance(profile.background, ImageBackground)

    def test_invalid_color_rejected(self):
        with pytest.raises(ValueError):
            _update(primary_color="brown")


# =============================================================================
# Reads
# =============================================================================

class TestReads:
    """Test owner and public reads."""

    def test_my_profile_missing(self, fake_db, user_id):
        with pytest.raises(ProfileNotFoundError):
            ProfileService.get_my_profile(user_id)

    def test_public_profile(self, fake_db, profile_row):
        fake_db.seed("profiles", profile_row)

        public = ProfileService.get_public_profile("sao-joao")
        data = public.model_dump()

        assert "user_id" not in data
        assert "id" not in data
        assert public.display_name == "Pe. João da Silva"
        assert public.civil_status_label == "Padre"
        assert public.sacraments == ["Batismo", "Crisma"]
        assert public.background_css == "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"
        assert public.public_path == "/p/sao-joao"
        assert public.embeds[0].embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        assert public.embeds[1].embed_url is None
        assert public.embeds[1].error == "URL do Spotify inválida"

    def test_embed_without_title(self, fake_db, profile_row):
        profile_row["music_embeds"] = [
            {"type": "youtube", "url": "https://youtu.be/dQw4w9WgXcQ", "title": None}
        ]
        fake_db.seed("profiles", profile_row)

        public = ProfileService.get_public_profile("sao-joao")

        assert public.embeds[0].title == ""
        assert public.embeds[0].embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_public_profile_not_found(self, fake_db):
        with pytest.raises(ProfileNotFoundError) as exc:
            ProfileService.get_public_profile("ninguem")

        assert exc.value.status_code == 404
        assert exc.value.code == "PROFILE_NOT_FOUND"
