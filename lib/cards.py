# =============================================================================
# lib/cards.py - Card Rendering (Pillow)
# =============================================================================
# Draws the two exportable cards as bitmaps:
# - WalletCard: the pocket "carteirinha" (1.586 aspect ratio, gradient
#   from the primary to the secondary color, QR code of the public link)
# - ScheduleCard: one liturgical schedule on a white background
#
# Layout is expressed in logical pixels; rasterize() multiplies everything
# by `scale` so a 2x/3x export is sharp rather than upsampled.
#
# Usage:
#   card = WalletCard(name="Pe. João", public_url="https://.../p/sao-joao", ...)
#   image = rasterize(card, scale=3)
#   png = to_png(image)
# =============================================================================

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
import qrcode
from PIL import Image, ImageDraw, ImageFont

from lib.theme import hex_to_rgb

logger = logging.getLogger(__name__)

WALLET_WIDTH = 448
WALLET_ASPECT_RATIO = 1.586
WALLET_GRADIENT_ANGLE = 135

SCHEDULE_WIDTH = 600
SCHEDULE_BACKGROUND = "#ffffff"
SCHEDULE_ACCENT = (120, 53, 15)

TEXT_DARK = (31, 41, 55)
TEXT_MUTED = (107, 114, 128)


class Card(Protocol):
    def render(self, scale: float) -> Image.Image: ...


def rasterize(card: Card, scale: float = 2) -> Image.Image:
    """Render a card at a pixel-density multiplier."""
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    return card.render(scale)


def to_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_pdf(image: Image.Image) -> bytes:
    """
    Single-page PDF whose page is exactly the bitmap's size.

    At 72 dpi one pixel is one PDF point, so the page is width x height
    and landscape/portrait follows from the bitmap.
    """
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="PDF", resolution=72.0)
    return buffer.getvalue()


# =============================================================================
# Drawing Helpers
# =============================================================================

def linear_gradient(
    size: tuple[int, int],
    colors: list[tuple[int, int, int]],
    angle: float = WALLET_GRADIENT_ANGLE,
    positions: list[float] | None = None,
) -> Image.Image:
    """
    Fill an image with a CSS-style linear gradient.

    `angle` follows CSS: 0deg points up, 90deg right, 135deg to the
    bottom-right corner. Stop positions are 0..1 and default to evenly spaced.
    """
    width, height = size
    if positions is None:
        positions = list(np.linspace(0.0, 1.0, len(colors)))

    rad = math.radians(angle)
    dx, dy = math.sin(rad), -math.cos(rad)
    # CSS gradient line length for this box and angle
    length = abs(width * dx) + abs(height * dy) or 1.0

    xs = np.arange(width) - (width - 1) / 2
    ys = np.arange(height) - (height - 1) / 2
    t = (xs[None, :] * dx + ys[:, None] * dy) / length + 0.5
    t = np.clip(t, 0.0, 1.0)

    channels = [
        np.interp(t, positions, [c[i] for c in colors])
        for i in range(3)
    ]
    pixels = np.stack(channels, axis=-1).round().astype(np.uint8)
    return Image.fromarray(pixels)


def qr_image(payload: str, size: int) -> Image.Image:
    """Square black-on-white QR code, medium error correction."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=0,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    return img.resize((size, size), Image.NEAREST)


def _font(size: float) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=max(1, round(size)))


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: float) -> list[str]:
    """Greedy word wrap; words wider than the box get their own line."""
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}".strip()
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


def _translucent(color: tuple[int, int, int], alpha: float) -> tuple[int, int, int, int]:
    return (*color, round(255 * alpha))


# =============================================================================
# Wallet Card
# =============================================================================

@dataclass
class WalletCard:
    """Content of the pocket card. Empty fields are simply not drawn."""

    name: str
    public_url: str | None
    public_path: str | None = None
    civil_status: str = ""
    parish: str = ""
    baptism_date: str = ""
    patron_saint: str = ""
    primary_color: str = "#8B4513"
    secondary_color: str = "#D4AF37"

    def render(self, scale: float) -> Image.Image:
        s = scale
        width = round(WALLET_WIDTH * s)
        height = round(WALLET_WIDTH / WALLET_ASPECT_RATIO * s)

        base = linear_gradient(
            (width, height),
            [hex_to_rgb(self.primary_color), hex_to_rgb(self.secondary_color)],
            angle=WALLET_GRADIENT_ANGLE,
        ).convert("RGBA")
        overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        white = (255, 255, 255)
        pad = 24 * s

        # Header
        y = pad
        draw.text((pad, y), "CARTEIRINHA CATÓLICA", font=_font(11 * s), fill=_translucent(white, 0.9))
        y += 16 * s
        draw.text((pad, y), "Católico Apostólico Romano", font=_font(11 * s), fill=_translucent(white, 0.8))
        y += 28 * s

        # Name block
        draw.text((pad, y), "NOME", font=_font(10 * s), fill=_translucent(white, 0.7))
        y += 14 * s
        name_font = _font(18 * s)
        for line in _wrap(draw, self.name or "", name_font, width - 2 * pad)[:2]:
            draw.text((pad, y), line, font=name_font, fill=white)
            y += 22 * s
        if self.civil_status:
            draw.text((pad, y), self.civil_status, font=_font(11 * s), fill=_translucent(white, 0.8))
            y += 16 * s
        y += 8 * s

        # Details grid: parish | baptism, then patron saint full width
        column = (width - 2 * pad) / 2
        label_font, value_font = _font(10 * s), _font(12 * s)
        details = []
        if self.parish:
            details.append(("PARÓQUIA", self.parish, column))
        if self.baptism_date:
            details.append(("BATISMO", self.baptism_date, column))
        row_y = y
        for index, (label, value, box) in enumerate(details):
            x = pad + (index % 2) * column
            draw.text((x, row_y), label, font=label_font, fill=_translucent(white, 0.7))
            line = _wrap(draw, value, value_font, box - 8 * s)[0]
            draw.text((x, row_y + 14 * s), line, font=value_font, fill=white)
        if details:
            y = row_y + 36 * s
        if self.patron_saint:
            draw.text((pad, y), "SANTO DE DEVOÇÃO", font=label_font, fill=_translucent(white, 0.7))
            draw.text((pad, y + 14 * s), self.patron_saint, font=value_font, fill=white)

        # Footer: link on the left, QR on the right
        qr_size = round(64 * s)
        qr_pad = round(8 * s)
        footer_top = height - pad - qr_size - 2 * qr_pad
        draw.line(
            [(pad, footer_top - 8 * s), (width - pad, footer_top - 8 * s)],
            fill=_translucent(white, 0.2),
            width=max(1, round(s)),
        )
        text_y = height - pad - 28 * s
        draw.text((pad, text_y), "ACESSE O PERFIL", font=label_font, fill=_translucent(white, 0.7))
        draw.text(
            (pad, text_y + 14 * s),
            self.public_path or "Sem link público",
            font=_font(11 * s),
            fill=_translucent(white, 0.9),
        )

        image = Image.alpha_composite(base, overlay)
        if self.public_url and self.public_path:
            box_size = qr_size + 2 * qr_pad
            left = width - round(pad) - box_size
            top = height - round(pad) - box_size
            tile = Image.new("RGB", (box_size, box_size), white)
            tile.paste(qr_image(self.public_url, qr_size), (qr_pad, qr_pad))
            image.paste(tile, (left, top))

        return image.convert("RGB")


# =============================================================================
# Schedule Card
# =============================================================================

@dataclass
class ScheduleCardParticipant:
    name: str
    role: str | None = None


@dataclass
class ScheduleCard:
    """One liturgical schedule as exported to PNG/PDF."""

    date_label: str
    weekday: str
    time: str
    community: str
    participants: list[ScheduleCardParticipant] = field(default_factory=list)
    notes: str | None = None

    def render(self, scale: float) -> Image.Image:
        s = scale
        width = round(SCHEDULE_WIDTH * s)
        pad = 32 * s
        inner = width - 2 * pad

        title_font = _font(22 * s)
        heading_font = _font(14 * s)
        body_font = _font(14 * s)
        small_font = _font(12 * s)

        # Measure first so the canvas fits the content exactly
        probe = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        note_lines = _wrap(probe, self.notes, body_font, inner) if self.notes else []
        participant_lines = []
        for p in self.participants:
            text = p.name if not p.role else f"{p.name} - {p.role}"
            participant_lines.extend(_wrap(probe, text, body_font, inner - 16 * s))

        line = 22 * s
        height = pad
        height += 30 * s            # title
        height += 2 * line          # date + weekday/time
        height += line + 12 * s     # community
        height += 24 * s + line * max(1, len(participant_lines))
        if note_lines:
            height += 12 * s + 24 * s + line * len(note_lines)
        height += pad

        image = Image.new("RGB", (width, round(height)), SCHEDULE_BACKGROUND)
        draw = ImageDraw.Draw(image)

        y = pad
        draw.text((pad, y), "Escala Litúrgica", font=title_font, fill=SCHEDULE_ACCENT)
        y += 30 * s
        draw.text((pad, y), self.date_label, font=heading_font, fill=TEXT_DARK)
        y += line
        draw.text((pad, y), f"{self.weekday} · {self.time}", font=body_font, fill=TEXT_MUTED)
        y += line
        draw.text((pad, y), self.community, font=heading_font, fill=TEXT_DARK)
        y += line + 12 * s

        draw.line([(pad, y - 6 * s), (width - pad, y - 6 * s)], fill=(229, 231, 235), width=max(1, round(s)))
        draw.text((pad, y), "PARTICIPANTES", font=small_font, fill=TEXT_MUTED)
        y += 24 * s
        if not participant_lines:
            draw.text((pad + 16 * s, y), "-", font=body_font, fill=TEXT_MUTED)
            y += line
        for text in participant_lines:
            draw.text((pad + 16 * s, y), text, font=body_font, fill=TEXT_DARK)
            y += line

        if note_lines:
            y += 12 * s
            draw.text((pad, y), "OBSERVAÇÕES", font=small_font, fill=TEXT_MUTED)
            y += 24 * s
            for text in note_lines:
                draw.text((pad, y), text, font=body_font, fill=TEXT_DARK)
                y += line

        return image
