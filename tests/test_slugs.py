# =============================================================================
# tests/test_slugs.py - Slug Normalization Tests
# =============================================================================

import pytest

from lib.slugs import (
    SLUG_MIN_LENGTH,
    is_checkable,
    is_valid_slug,
    normalize_slug,
    public_profile_path,
)


class TestNormalizeSlug:
    """Test normalize_slug()."""

    def test_accents_and_punctuation(self):
        assert normalize_slug("São João!") == "sao-joao"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Maria das Dores", "maria-das-dores"),
            ("  --Nossa   Senhora--  ", "nossa-senhora"),
            ("Ação & Oração", "acao-oracao"),
            ("PADRE_PIO 2024", "padre-pio-2024"),
            ("ç", "c"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_examples(self, text, expected):
        assert normalize_slug(text) == expected

    def test_none_is_empty(self):
        assert normalize_slug(None) == ""

    @pytest.mark.parametrize("text", ["São João!", "a--b", "-x-", "Ñandú  Ü", "já é"])
    def test_idempotent(self, text):
        once = normalize_slug(text)
        assert normalize_slug(once) == once

    @pytest.mark.parametrize("text", ["--a  b--", "a!!!b???c", "  é  ", "x- -y"])
    def test_no_stray_hyphens(self, text):
        slug = normalize_slug(text)
        assert not slug.startswith("-")
        assert not slug.endswith("-")
        assert "--" not in slug


class TestSlugChecks:
    """Test length/shape helpers."""

    def test_short_slugs_not_checkable(self):
        assert SLUG_MIN_LENGTH == 3
        assert not is_checkable(normalize_slug("ab"))
        assert not is_checkable(normalize_slug("à!"))
        assert is_checkable("abc")

    def test_valid_slug(self):
        assert is_valid_slug("sao-joao")
        assert not is_valid_slug("Sao-Joao")
        assert not is_valid_slug("sao--joao")
        assert not is_valid_slug("ab")

    def test_public_path(self):
        assert public_profile_path("sao-joao") == "/p/sao-joao"
