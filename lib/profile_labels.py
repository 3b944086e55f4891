# =============================================================================
# lib/profile_labels.py - Display Labels for Profiles
# =============================================================================

from __future__ import annotations

from enum import Enum


class CivilStatus(str, Enum):
    SOLTEIRO = "solteiro"
    CASADO = "casado"
    NAMORANDO = "namorando"
    RELIGIOSO = "religioso"
    SEMINARISTA = "seminarista"
    DIACONO = "diacono"
    PADRE = "padre"


class Sacrament(str, Enum):
    BATISMO = "batismo"
    CONFISSAO = "confissao"
    EUCARISTIA = "eucaristia"
    CRISMA = "crisma"
    MATRIMONIO = "matrimonio"
    ORDEM = "ordem"
    UNCAO = "uncao"


CIVIL_STATUS_LABELS = {
    CivilStatus.SOLTEIRO: "Solteiro(a)",
    CivilStatus.CASADO: "Casado(a)",
    CivilStatus.NAMORANDO: "Namorando",
    CivilStatus.RELIGIOSO: "Religioso(a)",
    CivilStatus.SEMINARISTA: "Seminarista",
    CivilStatus.DIACONO: "Diácono",
    CivilStatus.PADRE: "Padre",
}

SACRAMENT_LABELS = {
    Sacrament.BATISMO: "Batismo",
    Sacrament.CONFISSAO: "Confissão",
    Sacrament.EUCARISTIA: "Eucaristia",
    Sacrament.CRISMA: "Crisma",
    Sacrament.MATRIMONIO: "Matrimônio",
    Sacrament.ORDEM: "Ordem",
    Sacrament.UNCAO: "Unção dos Enfermos",
}


def display_name(name: str, civil_status: str | None) -> str:
    """Priests are shown as "Pe. <name>" unless the name already says so."""
    if civil_status == CivilStatus.PADRE.value and name and not name.lower().startswith("pe."):
        return f"Pe. {name}"
    return name


def civil_status_label(status: str | None) -> str:
    if not status:
        return ""
    try:
        return CIVIL_STATUS_LABELS[CivilStatus(status)]
    except ValueError:
        return status


def sacrament_label(sacrament: str) -> str:
    try:
        return SACRAMENT_LABELS[Sacrament(sacrament)]
    except ValueError:
        return sacrament
