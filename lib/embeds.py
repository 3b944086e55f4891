# =============================================================================
# lib/embeds.py - Music/Video Embed Resolver
# =============================================================================
# Parses a pasted Spotify or YouTube URL into the provider-native content id
# and builds the iframe source for it.
#
# Patterns are tried in order and the first match wins. An unrecognized URL
# raises InvalidEmbedUrlError from resolve_embed(); render_embed() turns that
# into an inline error so callers never emit a broken iframe.
#
# Usage:
#   from lib.embeds import render_embed, MusicEmbed
#   rendered = render_embed(MusicEmbed(provider="youtube", url=url, title=""))
#   rendered.embed_url  # "https://www.youtube.com/embed/..." or None
# =============================================================================

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from lib.utils import ApplicationError


class EmbedProvider(str, Enum):
    SPOTIFY = "spotify"
    YOUTUBE = "youtube"


SPOTIFY_PATTERNS = [
    re.compile(r"spotify\.com/track/([a-zA-Z0-9]+)"),
    re.compile(r"spotify\.com/playlist/([a-zA-Z0-9]+)"),
    re.compile(r"spotify\.com/album/([a-zA-Z0-9]+)"),
]

YOUTUBE_PATTERNS = [
    re.compile(r"youtube\.com/watch\?v=([a-zA-Z0-9_-]+)"),
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]+)"),
    re.compile(r"youtube\.com/embed/([a-zA-Z0-9_-]+)"),
]

INVALID_URL_MESSAGES = {
    EmbedProvider.SPOTIFY: "URL do Spotify inválida",
    EmbedProvider.YOUTUBE: "URL do YouTube inválida",
}


class InvalidEmbedUrlError(ApplicationError):
    """Raised when no pattern recognizes the pasted URL."""

    def __init__(self, provider: EmbedProvider, url: str):
        super().__init__(
            INVALID_URL_MESSAGES[provider],
            code="INVALID_EMBED_URL",
            suggestion="Paste the share link copied from the Spotify or YouTube app",
            details={"provider": provider.value, "url": url},
        )
        self.provider = provider


# =============================================================================
# Models
# =============================================================================

class MusicEmbed(BaseModel):
    """One music/video entry of a profile, stored inline in display order."""

    provider: EmbedProvider = Field(
        ...,
        alias="type",
        description="spotify or youtube",
    )
    url: str = Field(..., min_length=1, max_length=500)
    title: str = Field(default="", max_length=200)

    model_config = {"populate_by_name": True}

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, v):
        # rows saved without a title hold null
        return "" if v is None else v

    def to_row(self) -> dict[str, str]:
        """Shape stored in profiles.music_embeds."""
        return {"type": self.provider.value, "url": self.url, "title": self.title}


class EmbedTarget(BaseModel):
    """A recognized embed: provider id plus the iframe source."""
    provider: EmbedProvider
    kind: str
    content_id: str
    embed_url: str


class RenderedEmbed(BaseModel):
    """What a view shows for one MusicEmbed: an iframe or an inline error."""
    provider: EmbedProvider
    title: str = ""
    url: str
    kind: str | None = None
    content_id: str | None = None
    embed_url: str | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.embed_url is not None


# =============================================================================
# Extraction
# =============================================================================

def _first_match(patterns: list[re.Pattern], url: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_spotify_id(url: str) -> str | None:
    return _first_match(SPOTIFY_PATTERNS, url)


def extract_youtube_id(url: str) -> str | None:
    return _first_match(YOUTUBE_PATTERNS, url)


def spotify_kind(url: str) -> str:
    """Content kind from the URL shape; the embed path needs it as a segment."""
    if "/track/" in url:
        return "track"
    if "/playlist/" in url:
        return "playlist"
    if "/album/" in url:
        return "album"
    return "track"


def resolve_embed(provider: EmbedProvider | str, url: str) -> EmbedTarget:
    """
    Resolve a pasted URL into an embeddable target.

    Raises:
        InvalidEmbedUrlError: If no pattern for the provider matches
    """
    provider = EmbedProvider(provider)
    url = (url or "").strip()

    if provider is EmbedProvider.SPOTIFY:
        content_id = extract_spotify_id(url)
        if not content_id:
            raise InvalidEmbedUrlError(provider, url)
        kind = spotify_kind(url)
        return EmbedTarget(
            provider=provider,
            kind=kind,
            content_id=content_id,
            embed_url=f"https://open.spotify.com/embed/{kind}/{content_id}",
        )

    content_id = extract_youtube_id(url)
    if not content_id:
        raise InvalidEmbedUrlError(provider, url)
    return EmbedTarget(
        provider=provider,
        kind="video",
        content_id=content_id,
        embed_url=f"https://www.youtube.com/embed/{content_id}",
    )


def render_embed(embed: MusicEmbed) -> RenderedEmbed:
    """Resolve one embed for display; never raises on a bad URL."""
    try:
        target = resolve_embed(embed.provider, embed.url)
    except InvalidEmbedUrlError as e:
        return RenderedEmbed(
            provider=embed.provider,
            title=embed.title,
            url=embed.url,
            error=e.message,
        )
    return RenderedEmbed(
        provider=embed.provider,
        title=embed.title,
        url=embed.url,
        kind=target.kind,
        content_id=target.content_id,
        embed_url=target.embed_url,
    )


def render_embeds(embeds: list[MusicEmbed]) -> list[RenderedEmbed]:
    return [render_embed(e) for e in embeds]
