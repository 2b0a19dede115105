# engine/policy/tags.py
"""
Deux chemins distincts pour les tags d'un dossier :

    tags_to_add()  : fusion - seuls les tags absents sont insérés, rien n'est retiré
    replace_tags() : remplace l'ensemble (mise à jour de statut avec liste)

Normalisation : espaces retirés, vides ignorés, doublons supprimés, ordre
de première apparition conservé.
"""
from typing import Iterable, List

from crewdesk.shared.errors import ValidationFailed

MAX_TAG_LENGTH = 50


def normalize_tags(tags: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for raw in tags or []:
        tag = (raw or "").strip()
        if not tag or tag in seen:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise ValidationFailed(
                f"Tag too long: {tag[:20]}",
                errors=[{"field": "tags", "message": f"max {MAX_TAG_LENGTH} characters"}],
            )
        seen.add(tag)
        out.append(tag)
    return out


def tags_to_add(existing: Iterable[str], incoming: Iterable[str]) -> List[str]:
    current = set(normalize_tags(existing))
    return [t for t in normalize_tags(incoming) if t not in current]


def replace_tags(incoming: Iterable[str]) -> List[str]:
    return normalize_tags(incoming)
