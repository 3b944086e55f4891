# =============================================================================
# core/services/export_service.py - Card Export (PNG / PDF / Share)
# =============================================================================
# Turns a profile or a schedule into a downloadable card.
#
# - Wallet card: PNG at 3x (download) or 2x (share)
# - Schedule card: PNG or PDF at EXPORT_SCALE, PDF page sized to the bitmap
# - Share: hand the PNG to a Sharer when one is configured and accepts
#   files, otherwise return it inline for the client to open
#
# Whatever goes wrong while rendering or sharing is logged and reported as
# a single ExportError; callers never see a raw Pillow/qrcode exception.
# =============================================================================

import base64
import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from app.config import settings
from app.exceptions import ExportError
from core.models.media import ShareMethod, ShareResult
from core.models.profile import Profile
from core.models.schedule import PublicSchedule, ScheduleView
from lib.cards import (
    ScheduleCard,
    ScheduleCardParticipant,
    WalletCard,
    rasterize,
    to_pdf,
    to_png,
)
from lib.profile_labels import civil_status_label
from lib.slugs import public_profile_path
from lib.utils import format_long_date_pt, format_short_date_pt, weekday_pt

logger = logging.getLogger(__name__)

WALLET_DOWNLOAD_SCALE = 3
WALLET_SHARE_SCALE = 2
SHARE_FILENAME = "carteira-catolica.png"
SHARE_TEXT = "Confira minha carteirinha católica digital!"
DEFAULT_SHARE_TITLE = "Minha Carteirinha Católica"

ExportFormat = Literal["png", "pdf"]

MEDIA_TYPES = {
    "png": "image/png",
    "pdf": "application/pdf",
}


@dataclass
class ExportedFile:
    """Rendered bytes plus what the HTTP layer needs to serve them."""
    content: bytes
    filename: str
    media_type: str


@dataclass
class SharedFile:
    filename: str
    content: bytes
    media_type: str = "image/png"


class Sharer(Protocol):
    """A native share target (messaging bridge, device share sheet, ...)."""

    def can_share(self, files: list[SharedFile]) -> bool: ...

    def share(self, title: str, text: str, url: str, files: list[SharedFile]) -> None: ...


# =============================================================================
# Names
# =============================================================================

def wallet_filename(slug: str | None) -> str:
    return f"carteira-{slug or 'catolica'}.png"


def schedule_filename(schedule_date: str, horario: str, fmt: ExportFormat) -> str:
    return f"escala-{schedule_date}-{horario}.{fmt}"


def public_profile_url(slug: str) -> str:
    return f"{settings.public_base_url}{public_profile_path(slug)}"


# =============================================================================
# Card Content
# =============================================================================

def wallet_card(profile: Profile) -> WalletCard:
    """Wallet card content for a profile."""
    return WalletCard(
        name=profile.display_name,
        public_url=public_profile_url(profile.slug) if profile.slug else None,
        public_path=public_profile_path(profile.slug) if profile.slug else None,
        civil_status=civil_status_label(profile.civil_status.value if profile.civil_status else None),
        parish=profile.parish,
        baptism_date=format_short_date_pt(profile.baptism_date) if profile.baptism_date else "",
        patron_saint=profile.patron_saint,
        primary_color=profile.primary_color,
        secondary_color=profile.secondary_color,
    )


def schedule_card(schedule: ScheduleView | PublicSchedule) -> ScheduleCard:
    """Schedule card content from either the coordinator or the public view."""
    return ScheduleCard(
        date_label=format_long_date_pt(schedule.data),
        weekday=weekday_pt(schedule.data),
        time=schedule.horario,
        community=schedule.comunidade_nome,
        participants=[
            ScheduleCardParticipant(name=p.nome_completo, role=p.funcao_liturgica)
            for p in schedule.participantes
        ],
        notes=schedule.observacoes,
    )


class ExportService:
    """Service for rendering and sharing cards."""

    @staticmethod
    def export_wallet(profile: Profile, scale: float = WALLET_DOWNLOAD_SCALE) -> ExportedFile:
        """
        Render the wallet card as PNG.

        Raises:
            ExportError: Rendering failed
        """
        try:
            png = to_png(rasterize(wallet_card(profile), scale))
        except Exception as e:
            logger.error(f"Wallet export failed for profile {profile.id}: {e}")
            raise ExportError(str(e)) from e

        return ExportedFile(content=png, filename=wallet_filename(profile.slug), media_type=MEDIA_TYPES["png"])

    @staticmethod
    def export_schedule(
        schedule: ScheduleView | PublicSchedule,
        fmt: ExportFormat = "png",
        scale: float | None = None,
    ) -> ExportedFile:
        """
        Render a schedule card as PNG or PDF.

        Args:
            schedule: Coordinator or public view of the schedule
            fmt: "png" or "pdf"
            scale: Pixel-density multiplier (defaults to EXPORT_SCALE)

        Raises:
            ExportError: Rendering failed or unknown format
        """
        if fmt not in MEDIA_TYPES:
            raise ExportError(f"Unsupported format: {fmt}")

        try:
            image = rasterize(schedule_card(schedule), scale or settings.EXPORT_SCALE)
            content = to_pdf(image) if fmt == "pdf" else to_png(image)
        except Exception as e:
            logger.error(f"Schedule export ({fmt}) failed for {schedule.id}: {e}")
            raise ExportError(str(e)) from e

        return ExportedFile(
            content=content,
            filename=schedule_filename(schedule.data.isoformat(), schedule.horario, fmt),
            media_type=MEDIA_TYPES[fmt],
        )

    @staticmethod
    def share_wallet(profile: Profile, sharer: Sharer | None = None) -> ShareResult:
        """
        Share the wallet card.

        Uses the sharer when it exists and accepts the PNG; otherwise the
        PNG comes back inline as a data URL so the client can open it.

        Raises:
            ExportError: Rendering or the native share failed
        """
        title = f"Carteirinha Católica - {profile.full_name}" if profile.full_name else DEFAULT_SHARE_TITLE
        url = public_profile_url(profile.slug) if profile.slug else settings.public_base_url

        try:
            png = to_png(rasterize(wallet_card(profile), WALLET_SHARE_SCALE))
            files = [SharedFile(filename=SHARE_FILENAME, content=png)]

            if sharer is not None and sharer.can_share(files):
                sharer.share(title, SHARE_TEXT, url, files)
                logger.info(f"Shared wallet card of profile {profile.id} natively")
                return ShareResult(
                    method=ShareMethod.NATIVE,
                    filename=SHARE_FILENAME,
                    title=title,
                    text=SHARE_TEXT,
                    url=url,
                )

        except Exception as e:
            logger.error(f"Wallet share failed for profile {profile.id}: {e}")
            raise ExportError(str(e)) from e

        return ShareResult(
            method=ShareMethod.INLINE,
            filename=SHARE_FILENAME,
            title=title,
            text=SHARE_TEXT,
            url=url,
            data_url="data:image/png;base64," + base64.b64encode(png).decode("ascii"),
        )
