# =============================================================================
# lib/theme.py - Profile Background & Colors
# =============================================================================
# The profile background is a tagged variant instead of an opaque CSS string:
#
#   SolidBackground(color)
#   GradientBackground(stops, angle, custom)
#   ImageBackground(url, overlay_opacity)
#
# Rows still store the original three columns (background_type,
# background_value, background_overlay_opacity); parse_background() and
# background_columns() convert in both directions. Values produced by
# to_css() parse back to the same variant.
# =============================================================================

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_PRIMARY_COLOR = "#8B4513"
DEFAULT_SECONDARY_COLOR = "#D4AF37"
DEFAULT_OVERLAY_OPACITY = 0.3
DEFAULT_GRADIENT_ANGLE = 135

HEX_COLOR_RE = re.compile(r"^#([0-9a-fA-F]{6})$")

_GRADIENT_RE = re.compile(
    r"^linear-gradient\(\s*(?P<angle>-?\d+(?:\.\d+)?)deg\s*,(?P<stops>.+)\)$"
)
_STOP_RE = re.compile(r"^\s*(?P<color>#[0-9a-fA-F]{3,8})\s+(?P<pos>\d+(?:\.\d+)?)%\s*$")


def hex_to_rgb(value: str | None) -> tuple[int, int, int]:
    """
    Convert "#rrggbb" (hash optional) to an RGB tuple.

    Anything unparseable falls back to mid grey.
    """
    match = re.match(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", value or "", re.IGNORECASE)
    if not match:
        return (128, 128, 128)
    return tuple(int(part, 16) for part in match.groups())


def _check_hex(value: str) -> str:
    if not HEX_COLOR_RE.match(value):
        raise ValueError(f"Expected a #rrggbb color, got {value!r}")
    return value.lower()


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


# =============================================================================
# Background Variants
# =============================================================================

class GradientStop(BaseModel):
    color: str
    position: float = Field(..., ge=0, le=100)

    @field_validator("color")
    @classmethod
    def _color(cls, v: str) -> str:
        return _check_hex(v)


class SolidBackground(BaseModel):
    kind: Literal["solid"] = "solid"
    color: str

    @field_validator("color")
    @classmethod
    def _color(cls, v: str) -> str:
        return _check_hex(v)

    def to_css(self) -> str:
        return self.color


class GradientBackground(BaseModel):
    kind: Literal["gradient"] = "gradient"
    stops: list[GradientStop] = Field(..., min_length=2)
    angle: float = Field(default=DEFAULT_GRADIENT_ANGLE, ge=0, le=360)
    custom: bool = False

    def to_css(self) -> str:
        stops = ", ".join(f"{s.color} {_format_number(s.position)}%" for s in self.stops)
        return f"linear-gradient({_format_number(self.angle)}deg, {stops})"

    @property
    def colors(self) -> list[str]:
        return [s.color for s in self.stops]


class ImageBackground(BaseModel):
    kind: Literal["image"] = "image"
    url: str = Field(..., min_length=1)
    overlay_opacity: float = Field(default=DEFAULT_OVERLAY_OPACITY, ge=0, le=1)

    def to_css(self) -> str:
        return f"url({self.url})"


Background = Annotated[
    Union[SolidBackground, GradientBackground, ImageBackground],
    Field(discriminator="kind"),
]


# =============================================================================
# Presets
# =============================================================================

class GradientPreset(BaseModel):
    name: str
    value: str
    colors: list[str]


def _preset(name: str, c1: str, c2: str) -> GradientPreset:
    return GradientPreset(
        name=name,
        value=f"linear-gradient(135deg, {c1} 0%, {c2} 100%)",
        colors=[c1, c2],
    )


GRADIENT_PRESETS: list[GradientPreset] = [
    _preset("Roxo Celestial", "#667eea", "#764ba2"),
    _preset("Pôr do Sol", "#f093fb", "#f5576c"),
    _preset("Oceano", "#4facfe", "#00f2fe"),
    _preset("Floresta", "#43e97b", "#38f9d7"),
    _preset("Dourado Real", "#ffd89b", "#19547b"),
    _preset("Aurora", "#a8edea", "#fed6e3"),
    _preset("Fogo Divino", "#fa709a", "#fee140"),
    _preset("Céu Noturno", "#30cfd0", "#330867"),
    _preset("Rosa Místico", "#ff9a9e", "#fecfef"),
    _preset("Terra Santa", "#ffecd2", "#fcb69f"),
]

DEFAULT_BACKGROUND_VALUE = GRADIENT_PRESETS[0].value


def custom_gradient(color1: str, color2: str, angle: float = DEFAULT_GRADIENT_ANGLE) -> GradientBackground:
    """Two-stop gradient built from the color pickers and the angle slider."""
    return GradientBackground(
        stops=[GradientStop(color=color1, position=0), GradientStop(color=color2, position=100)],
        angle=angle,
        custom=True,
    )


def default_background() -> GradientBackground:
    return parse_gradient(DEFAULT_BACKGROUND_VALUE)


# =============================================================================
# Row <-> Variant
# =============================================================================

def parse_gradient(value: str, custom: bool = False) -> GradientBackground:
    """
    Parse "linear-gradient(<angle>deg, <color> <pos>%, ...)".

    Raises:
        ValueError: If the string isn't a gradient of that shape
    """
    match = _GRADIENT_RE.match((value or "").strip())
    if not match:
        raise ValueError(f"Unsupported gradient: {value!r}")

    stops = []
    for part in match.group("stops").split(","):
        stop = _STOP_RE.match(part)
        if not stop:
            raise ValueError(f"Unsupported gradient stop: {part.strip()!r}")
        color = stop.group("color")
        if len(color) == 4:
            color = "#" + "".join(ch * 2 for ch in color[1:])
        stops.append(GradientStop(color=color[:7], position=float(stop.group("pos"))))

    return GradientBackground(stops=stops, angle=float(match.group("angle")), custom=custom)


def parse_background(
    background_type: str | None,
    background_value: str | None,
    overlay_opacity: float | None = None,
) -> SolidBackground | GradientBackground | ImageBackground:
    """
    Build the variant from the stored columns.

    Unparseable or missing values fall back to the default gradient, the
    same thing the editor shows for a brand-new profile.
    """
    value = (background_value or "").strip()

    if background_type == "image" and value:
        return ImageBackground(
            url=value,
            overlay_opacity=DEFAULT_OVERLAY_OPACITY if overlay_opacity is None else overlay_opacity,
        )

    if background_type == "solid" and HEX_COLOR_RE.match(value):
        return SolidBackground(color=value)

    if background_type in ("gradient", "custom-gradient"):
        try:
            return parse_gradient(value, custom=background_type == "custom-gradient")
        except ValueError:
            pass

    return default_background()


def background_columns(background: SolidBackground | GradientBackground | ImageBackground) -> dict:
    """Columns to write for a background variant."""
    if isinstance(background, ImageBackground):
        return {
            "background_type": "image",
            "background_value": background.url,
            "background_overlay_opacity": background.overlay_opacity,
        }
    if isinstance(background, SolidBackground):
        return {
            "background_type": "solid",
            "background_value": background.color,
            "background_overlay_opacity": DEFAULT_OVERLAY_OPACITY,
        }
    return {
        "background_type": "custom-gradient" if background.custom else "gradient",
        "background_value": background.to_css(),
        "background_overlay_opacity": DEFAULT_OVERLAY_OPACITY,
    }
