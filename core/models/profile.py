# =============================================================================
# core/models/profile.py - Catholic Profile Schemas
# =============================================================================
# These models define the API contract for profile operations:
# - ProfileUpdate: what the owner submits from the editor
# - Profile: the owner's full, editable view (keyed by session user)
# - PublicProfile: the read-only view served at /p/<slug>
# - SlugCheckResponse: result of a slug availability check
#
# The owner view and the public view are deliberately separate types:
# PublicProfile carries no user_id and nothing a client could use to write.
# =============================================================================

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from lib.embeds import MusicEmbed, RenderedEmbed, render_embeds
from lib.profile_labels import (
    CivilStatus,
    Sacrament,
    civil_status_label,
    display_name,
    sacrament_label,
)
from lib.slugs import SlugAvailability, public_profile_path
from lib.theme import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    HEX_COLOR_RE,
    Background,
    GradientBackground,
    ImageBackground,
    default_background,
    parse_background,
)


class ProfileUpdate(BaseModel):
    """
    Schema for saving the owner's profile (create on first save, update after).

    The slug is normalized by the service before any check; the raw text is
    accepted here so the editor can send exactly what was typed.

    Example:
        {
            "slug": "São João",
            "full_name": "João da Silva",
            "parish": "Paróquia Senhor Santo Cristo dos Milagres",
            "pastorals": ["Liturgia", "Catequese"],
            "background": {"kind": "gradient", "angle": 135,
                           "stops": [{"color": "#667eea", "position": 0},
                                     {"color": "#764ba2", "position": 100}]},
            "music_embeds": [{"type": "spotify",
                              "url": "https://open.spotify.com/track/abc123",
                              "title": "Hino"}]
        }
    """

    # Public link identifier (normalized server-side)
    slug: str = Field(
        ...,
        max_length=100,
        description="Desired public link; normalized to lowercase ASCII with hyphens"
    )

    full_name: str = Field(default="", max_length=200)
    civil_status: CivilStatus | None = None
    parish: str = Field(default="", max_length=200)
    pastorals: list[str] = Field(default_factory=list, max_length=20)
    baptism_date: date | None = None
    priest_name: str = Field(default="", max_length=200)
    patron_saint: str = Field(default="", max_length=200)
    saint_image_url: str = ""
    inspiration_quote: str = Field(default="", max_length=500)
    quote_author: str = Field(default="", max_length=200)
    bible_passage: str = Field(default="", max_length=2000)
    sacraments: list[Sacrament] = Field(default_factory=list)
    profile_image_url: str = ""
    cover_image_url: str = ""

    # Theme colors used by the wallet card gradient
    primary_color: str = Field(default=DEFAULT_PRIMARY_COLOR)
    secondary_color: str = Field(default=DEFAULT_SECONDARY_COLOR)

    background: Background = Field(default_factory=default_background)

    # Display order is list order
    music_embeds: list[MusicEmbed] = Field(default_factory=list, max_length=20)

    @field_validator("primary_color", "secondary_color")
    @classmethod
    def _hex_color(cls, v: str) -> str:
        if not HEX_COLOR_RE.match(v):
            raise ValueError("Colors must be #rrggbb")
        return v

    @field_validator("pastorals")
    @classmethod
    def _clean_pastorals(cls, v: list[str]) -> list[str]:
        return [p.strip() for p in v if p and p.strip()]

    @field_validator("sacraments")
    @classmethod
    def _unique_sacraments(cls, v: list[Sacrament]) -> list[Sacrament]:
        return list(dict.fromkeys(v))


class Profile(BaseModel):
    """
    The owner's profile as stored.

    Built from a `profiles` row with from_row(), which also turns the three
    background columns into a Background variant.
    """

    id: UUID
    user_id: UUID
    slug: str | None = None
    full_name: str = ""
    civil_status: CivilStatus | None = None
    parish: str = ""
    pastorals: list[str] = Field(default_factory=list)
    baptism_date: date | None = None
    priest_name: str = ""
    patron_saint: str = ""
    saint_image_url: str = ""
    inspiration_quote: str = ""
    quote_author: str = ""
    bible_passage: str = ""
    sacraments: list[Sacrament] = Field(default_factory=list)
    profile_image_url: str = ""
    cover_image_url: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    background: Background = Field(default_factory=default_background)
    music_embeds: list[MusicEmbed] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        data = {k: v for k, v in row.items() if v is not None}
        data["background"] = parse_background(
            row.get("background_type"),
            row.get("background_value"),
            row.get("background_overlay_opacity"),
        )
        data["music_embeds"] = row.get("music_embeds") or []
        data["pastorals"] = row.get("pastorals") or []
        data["sacraments"] = [
            s for s in (row.get("sacraments") or []) if s in Sacrament._value2member_map_
        ]
        for key in ("background_type", "background_value", "background_overlay_opacity"):
            data.pop(key, None)
        return cls.model_validate(data)

    @property
    def display_name(self) -> str:
        return display_name(self.full_name, self.civil_status.value if self.civil_status else None)


class PublicProfile(BaseModel):
    """
    Read-only profile served to anyone holding the link.

    Example:
        {
            "slug": "sao-joao",
            "display_name": "Pe. João",
            "background_css": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
            "embeds": [{"provider": "youtube", "embed_url": "https://www.youtube.com/embed/..."}],
            "public_path": "/p/sao-joao"
        }
    """

    slug: str
    display_name: str
    civil_status_label: str = ""
    parish: str = ""
    pastorals: list[str] = Field(default_factory=list)
    baptism_date: date | None = None
    priest_name: str = ""
    patron_saint: str = ""
    saint_image_url: str = ""
    inspiration_quote: str = ""
    quote_author: str = ""
    bible_passage: str = ""
    sacraments: list[str] = Field(default_factory=list)
    profile_image_url: str = ""
    cover_image_url: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    background_kind: str
    background_css: str
    background_overlay_opacity: float | None = None
    embeds: list[RenderedEmbed] = Field(default_factory=list)
    public_path: str

    @classmethod
    def from_profile(cls, profile: Profile) -> "PublicProfile":
        background = profile.background
        overlay = background.overlay_opacity if isinstance(background, ImageBackground) else None
        kind = background.kind
        if isinstance(background, GradientBackground) and background.custom:
            kind = "custom-gradient"
        return cls(
            slug=profile.slug or "",
            display_name=profile.display_name,
            civil_status_label=civil_status_label(
                profile.civil_status.value if profile.civil_status else None
            ),
            parish=profile.parish,
            pastorals=profile.pastorals,
            baptism_date=profile.baptism_date,
            priest_name=profile.priest_name,
            patron_saint=profile.patron_saint,
            saint_image_url=profile.saint_image_url,
            inspiration_quote=profile.inspiration_quote,
            quote_author=profile.quote_author,
            bible_passage=profile.bible_passage,
            sacraments=[sacrament_label(s.value) for s in profile.sacraments],
            profile_image_url=profile.profile_image_url,
            cover_image_url=profile.cover_image_url,
            primary_color=profile.primary_color,
            secondary_color=profile.secondary_color,
            background_kind=kind,
            background_css=background.to_css(),
            background_overlay_opacity=overlay,
            embeds=render_embeds(profile.music_embeds),
            public_path=public_profile_path(profile.slug or ""),
        )


class SlugCheckResponse(BaseModel):
    """Availability of a candidate slug (after normalization)."""
    slug: str
    status: SlugAvailability
