# =============================================================================
# app/routers/embeds.py - Embed & Theme Helpers
# =============================================================================
# Stateless helpers for the profile editor:
# - resolve a pasted Spotify/YouTube URL into an iframe source
# - list gradient presets and build a custom gradient
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from lib.embeds import MusicEmbed, RenderedEmbed, render_embed
from lib.theme import (
    DEFAULT_GRADIENT_ANGLE,
    GRADIENT_PRESETS,
    HEX_COLOR_RE,
    GradientBackground,
    GradientPreset,
    custom_gradient,
)

router = APIRouter()


class CustomGradientRequest(BaseModel):
    color1: str = Field(..., example="#667eea")
    color2: str = Field(..., example="#764ba2")
    angle: float = Field(default=DEFAULT_GRADIENT_ANGLE, ge=0, le=360)

    @field_validator("color1", "color2")
    @classmethod
    def _hex_color(cls, v: str) -> str:
        if not HEX_COLOR_RE.match(v):
            raise ValueError("Colors must be #rrggbb")
        return v


class CustomGradientResponse(BaseModel):
    background: GradientBackground
    css: str


@router.post("/embeds/resolve", response_model=RenderedEmbed, tags=["Embeds"])
async def resolve_embed(request: MusicEmbed):
    """
    Resolve a music/video URL for display.

    Always 200: an unrecognized URL comes back with `embed_url: null` and
    an inline `error` message instead of a broken iframe source.
    """
    return render_embed(request)


@router.get("/theme/presets", response_model=list[GradientPreset], tags=["Theme"])
async def list_gradient_presets():
    return GRADIENT_PRESETS


@router.post("/theme/custom-gradient", response_model=CustomGradientResponse, tags=["Theme"])
async def build_custom_gradient(request: CustomGradientRequest):
    """
    Build a two-color gradient from the pickers and angle slider.

    Raises:
        422: Colors not #rrggbb or angle outside 0..360
    """
    background = custom_gradient(request.color1, request.color2, request.angle)
    return CustomGradientResponse(background=background, css=background.to_css())
