# engine/policy/documents.py
"""
Règles sur les pièces d'un dossier marin.

Emplacements :
    obligatoires : cv, passport, cdc, stcw, coc, seamanBook, visa
    facultatif   : photo

Côté client :
    - liste blanche CLIENT_VIEWABLE_SLOTS (tout sauf le CV)
    - le CV n'est JAMAIS servi à un client, quel que soit le statut du dossier ;
      il apparaît seulement comme "restricted" dans la liste des pièces
    - les pièces autorisées sont servies en inline (consultation), pas en
      téléchargement

Fichiers acceptés : PDF / JPEG / PNG, 10 Mo max par fichier.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from crewdesk.shared.enums import DocumentSlot
from crewdesk.shared.errors import DocumentAccessDenied, ValidationFailed


REQUIRED_SLOTS: tuple = (
    DocumentSlot.CV,
    DocumentSlot.PASSPORT,
    DocumentSlot.CDC,
    DocumentSlot.STCW,
    DocumentSlot.COC,
    DocumentSlot.SEAMAN_BOOK,
    DocumentSlot.VISA,
)

CLIENT_VIEWABLE_SLOTS: frozenset = frozenset(
    s for s in DocumentSlot if s != DocumentSlot.CV
)

SLOT_LABELS: Dict[DocumentSlot, str] = {
    DocumentSlot.CV:          "CV",
    DocumentSlot.PASSPORT:    "Passport",
    DocumentSlot.CDC:         "CDC",
    DocumentSlot.STCW:        "STCW Certificates",
    DocumentSlot.COC:         "COC",
    DocumentSlot.SEAMAN_BOOK: "Seaman Book",
    DocumentSlot.VISA:        "Visa",
    DocumentSlot.PHOTO:       "Photo",
}

ALLOWED_CONTENT_TYPES: Dict[str, str] = {
    ".pdf":  "application/pdf",
    ".jpg":  "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png":  "image/png",
}

CV_RESTRICTED_MESSAGE = "Contact admin for access"


@dataclass(frozen=True)
class IncomingFile:
    """Fichier reçu, avant stockage."""
    slot: DocumentSlot
    filename: str
    content_type: str
    size: int


# ── Création d'un dossier ─────────────────────────────────────────────────────

def missing_required_documents(present: Iterable) -> List[DocumentSlot]:
    present_set = {DocumentSlot(s) for s in present}
    return [s for s in REQUIRED_SLOTS if s not in present_set]


def assert_required_documents(present: Iterable) -> None:
    missing = missing_required_documents(present)
    if missing:
        labels = [SLOT_LABELS[s] for s in missing]
        raise ValidationFailed(
            f"Required documents missing: {', '.join(labels)}",
            errors=[{"field": s.value, "message": "required"} for s in missing],
        )


def validate_file(incoming: IncomingFile, max_bytes: int) -> str:
    """Retourne le content-type normalisé ou lève ValidationFailed."""
    extension = os.path.splitext(incoming.filename or "")[1].lower()
    expected = ALLOWED_CONTENT_TYPES.get(extension)
    if expected is None or (incoming.content_type or "").lower() not in ALLOWED_CONTENT_TYPES.values():
        raise ValidationFailed(
            "Only PDF, JPEG, JPG, and PNG files are allowed",
            errors=[{"field": incoming.slot.value, "message": "unsupported file type"}],
        )
    if incoming.size > max_bytes:
        raise ValidationFailed(
            f"File too large: {SLOT_LABELS[incoming.slot]}",
            errors=[{"field": incoming.slot.value, "message": f"exceeds {max_bytes} bytes"}],
        )
    return expected


# ── Accès client ──────────────────────────────────────────────────────────────

def parse_client_slot(slot: str) -> DocumentSlot:
    """
    Vérifiée AVANT toute lecture du dossier : un nom hors liste blanche
    (CV compris, ou emplacement inconnu) est refusé en 403.
    """
    try:
        parsed = DocumentSlot(slot)
    except ValueError:
        raise DocumentAccessDenied("Document type not available to clients")
    if parsed not in CLIENT_VIEWABLE_SLOTS:
        raise DocumentAccessDenied(f"{SLOT_LABELS[parsed]} is not available to clients. {CV_RESTRICTED_MESSAGE}")
    return parsed


def deny_cv_download() -> None:
    raise DocumentAccessDenied(f"CV downloads are not available. {CV_RESTRICTED_MESSAGE}")


def client_document_summary(documents: Iterable) -> Dict[str, dict]:
    """
    Vue client des pièces : nom d'origine et date, jamais la référence de
    stockage. Le CV présent est remplacé par un marqueur "restricted".
    """
    summary: Dict[str, dict] = {}
    for doc in documents:
        slot = DocumentSlot(doc.slot)
        if slot == DocumentSlot.CV:
            summary[slot.value] = {
                "available": False,
                "restricted": True,
                "message": CV_RESTRICTED_MESSAGE,
            }
            continue
        summary[slot.value] = {
            "name": doc.original_name,
            "uploaded_at": doc.uploaded_at,
            "available": True,
            "restricted": False,
        }
    return summary


def find_document(documents: Iterable, slot: DocumentSlot) -> Optional[object]:
    for doc in documents:
        if DocumentSlot(doc.slot) == slot:
            return doc
    return None
