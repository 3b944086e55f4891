# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure resolves to a readable message; nothing is retried here.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError


class CarteiraException(Exception):
    """
    Base exception for the Carteira Católica API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CARTEIRA_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Profile Exceptions
# =============================================================================

class ProfileNotFoundError(CarteiraException):
    """Raised when no profile matches a slug (or the user has none yet)."""

    def __init__(self, slug: str | None = None):
        super().__init__(
            message="Perfil não encontrado",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            suggestion="Check the link or create a profile first",
            details={"slug": slug} if slug else None,
        )


class SlugTooShortError(CarteiraException):
    """Raised when saving with a slug shorter than the minimum length."""

    def __init__(self, slug: str, min_length: int):
        super().__init__(
            message=f"O link personalizado deve ter pelo menos {min_length} caracteres",
            code="SLUG_TOO_SHORT",
            status_code=400,
            suggestion="Choose a longer slug using letters, digits and hyphens",
            details={"slug": slug, "min_length": min_length},
        )


class SlugTakenError(CarteiraException):
    """Raised when another profile already holds the slug."""

    def __init__(self, slug: str):
        super().__init__(
            message="Este link já está em uso. Escolha outro.",
            code="SLUG_TAKEN",
            status_code=409,
            suggestion="Pick a different slug and save again",
            details={"slug": slug},
        )


# =============================================================================
# Image Upload Exceptions
# =============================================================================

class InvalidImageTypeError(CarteiraException):
    """Raised when an uploaded file is not an allowed image type."""

    def __init__(self, content_type: str, allowed: list[str]):
        super().__init__(
            message="Apenas imagens JPG, PNG ou WEBP são permitidas",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Upload one of: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class ImageTooLargeError(CarteiraException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            message=f"A imagem deve ter no máximo {max_bytes // (1024 * 1024)}MB",
            code="IMAGE_TOO_LARGE",
            status_code=413,
            suggestion="Compress or resize the image before uploading",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


class ImageUploadError(CarteiraException):
    """Raised when the image host rejects an upload."""

    def __init__(self, error: str):
        super().__init__(
            message="Erro ao fazer upload da imagem",
            code="IMAGE_UPLOAD_FAILED",
            status_code=502,
            suggestion="Try again later",
            details={"error": error},
        )


# =============================================================================
# Schedule Exceptions
# =============================================================================

class ScheduleNotFoundError(CarteiraException):
    """Raised when a schedule ID doesn't exist."""

    def __init__(self, schedule_id: str):
        super().__init__(
            message=f"Escala não encontrada: {schedule_id}",
            code="SCHEDULE_NOT_FOUND",
            status_code=404,
            details={"schedule_id": schedule_id},
        )


class ScheduleLockedError(CarteiraException):
    """Raised when editing or deleting a schedule from a past month."""

    def __init__(self, schedule_id: str, schedule_date: str, action: str = "editar"):
        super().__init__(
            message=f"Não é possível {action} escalas de meses anteriores",
            code="SCHEDULE_LOCKED",
            status_code=403,
            suggestion="Only schedules in the current or a future month can be changed",
            details={"schedule_id": schedule_id, "date": schedule_date},
        )


class EmptyRosterError(CarteiraException):
    """Raised when a schedule is submitted without participants."""

    def __init__(self):
        super().__init__(
            message="Preencha todos os campos obrigatórios",
            code="EMPTY_ROSTER",
            status_code=400,
            suggestion="Select at least one participant for the schedule",
        )


class DuplicateParticipantError(CarteiraException):
    """Raised when the same person is listed twice in one schedule."""

    def __init__(self, person_id: str):
        super().__init__(
            message="Uma pessoa só pode aparecer uma vez por escala",
            code="DUPLICATE_PARTICIPANT",
            status_code=400,
            details={"pessoa_id": person_id},
        )


class ScheduleWriteError(CarteiraException):
    """Raised when the participant write fails after the parent row was written."""

    def __init__(self, schedule_id: str | None, error: str, rolled_back: bool):
        super().__init__(
            message="Erro ao salvar a escala",
            code="SCHEDULE_WRITE_FAILED",
            status_code=502,
            suggestion="Nothing was retried; submit the schedule again",
            details={"schedule_id": schedule_id, "error": error, "rolled_back": rolled_back},
        )


class InvalidMonthError(CarteiraException):
    """Raised when a month filter isn't in YYYY-MM form."""

    def __init__(self, month: str):
        super().__init__(
            message=f"Mês inválido: {month}",
            code="INVALID_MONTH",
            status_code=400,
            suggestion="Use the YYYY-MM format, e.g. 2024-05",
            details={"month": month},
        )


# =============================================================================
# Reference Data Exceptions
# =============================================================================

class InvalidRoleNameError(CarteiraException):
    """Raised when a liturgical role name is blank."""

    def __init__(self):
        super().__init__(
            message="Digite o nome da função",
            code="INVALID_ROLE_NAME",
            status_code=400,
        )


class RoleExistsError(CarteiraException):
    """Raised when a liturgical role with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(
            message="Esta função já existe",
            code="ROLE_EXISTS",
            status_code=409,
            details={"nome": name},
        )


# =============================================================================
# Export Exceptions
# =============================================================================

class ExportError(CarteiraException):
    """Raised when a card can't be rasterized or shared."""

    def __init__(self, error: str):
        super().__init__(
            message="Erro ao gerar a imagem. Tente novamente.",
            code="EXPORT_FAILED",
            status_code=500,
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def carteira_exception_handler(
    request: Request,
    exc: CarteiraException
) -> JSONResponse:
    """
    Convert CarteiraException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Surface a rejected table call as a readable 502."""
    content = {
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=502, content=content)
