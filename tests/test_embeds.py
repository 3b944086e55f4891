# =============================================================================
# tests/test_embeds.py - Music/Video Embed Tests
# =============================================================================

import pytest

from lib.embeds import (
    EmbedProvider,
    InvalidEmbedUrlError,
    MusicEmbed,
    extract_spotify_id,
    extract_youtube_id,
    render_embed,
    render_embeds,
    resolve_embed,
    spotify_kind,
)


class TestSpotify:
    """Test Spotify URL parsing."""

    def test_track(self):
        url = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC?si=abc"
        assert extract_spotify_id(url) == "4uLU6hMCjMI75M1A2tKUQC"
        assert spotify_kind(url) == "track"

    def test_playlist(self):
        url = "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M"
        target = resolve_embed("spotify", url)
        assert target.kind == "playlist"
        assert target.content_id == "37i9dQZF1DXcBWIGoYBM5M"
        assert target.embed_url == "https://open.spotify.com/embed/playlist/37i9dQZF1DXcBWIGoYBM5M"

    def test_album(self):
        target = resolve_embed(EmbedProvider.SPOTIFY, "https://open.spotify.com/album/1ATL5GLyefJaxhQzSPVrLX")
        assert target.kind == "album"

    def test_kind_defaults_to_track(self):
        assert spotify_kind("https://open.spotify.com/episode/xyz") == "track"

    def test_invalid(self):
        assert extract_spotify_id("https://open.spotify.com/artist/abc") is None
        with pytest.raises(InvalidEmbedUrlError) as exc:
            resolve_embed("spotify", "https://open.spotify.com/artist/abc")
        assert exc.value.message == "URL do Spotify inválida"
        assert exc.value.code == "INVALID_EMBED_URL"


class TestYouTube:
    """Test YouTube URL parsing."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
        ],
    )
    def test_ids(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    def test_embed_url(self):
        target = resolve_embed("youtube", "https://youtu.be/dQw4w9WgXcQ")
        assert target.kind == "video"
        assert target.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_invalid(self):
        with pytest.raises(InvalidEmbedUrlError) as exc:
            resolve_embed("youtube", "https://vimeo.com/123")
        assert exc.value.message == "URL do YouTube inválida"


class TestRenderEmbed:
    """render_embed never raises and never yields a broken iframe."""

    def test_valid(self):
        rendered = render_embed(MusicEmbed(provider="youtube", url="https://youtu.be/dQw4w9WgXcQ", title="Hino"))
        assert rendered.is_valid
        assert rendered.error is None
        assert rendered.title == "Hino"

    def test_invalid_inline_error(self):
        rendered = render_embed(MusicEmbed(provider="spotify", url="not a url"))
        assert not rendered.is_valid
        assert rendered.embed_url is None
        assert rendered.error == "URL do Spotify inválida"

    def test_order_preserved(self):
        embeds = [
            MusicEmbed(provider="spotify", url="https://open.spotify.com/track/a1"),
            MusicEmbed(provider="youtube", url="https://youtu.be/b2"),
        ]
        assert [r.content_id for r in render_embeds(embeds)] == ["a1", "b2"]

    def test_row_shape_uses_type_key(self):
        embed = MusicEmbed.model_validate({"type": "spotify", "url": "https://open.spotify.com/track/a1"})
        assert embed.to_row() == {"type": "spotify", "url": "https://open.spotify.com/track/a1", "title": ""}
