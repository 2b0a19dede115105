# engine/policy/bulk.py
"""
Résultat d'une opération groupée sur une liste explicite d'identifiants.

Chaque id est traité indépendamment : un id inconnu ou invalide devient un
échec individuel, jamais une erreur de lot.

    {total, successful, failed, results: [{id, success, reason?}]}
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BulkItemResult:
    id: int
    success: bool
    reason: Optional[str] = None


@dataclass
class BulkSummary:
    results: List[BulkItemResult] = field(default_factory=list)

    def ok(self, item_id: int) -> None:
        self.results.append(BulkItemResult(id=item_id, success=True))

    def fail(self, item_id: int, reason: str) -> None:
        self.results.append(BulkItemResult(id=item_id, success=False, reason=reason))

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.successful

    @property
    def succeeded_ids(self) -> List[int]:
        return [r.id for r in self.results if r.success]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "results": [
                {"id": r.id, "success": r.success, **({"reason": r.reason} if r.reason else {})}
                for r in self.results
            ],
        }


def unique_ids(ids: List[int]) -> List[int]:
    """Dédoublonne en conservant l'ordre de la requête."""
    seen = set()
    out = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out
