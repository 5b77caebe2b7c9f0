"""
Semantica di aggiornamento delle entità
Progetto: Concessionario (Gestionale Concessionaria)

Clienti e veicoli si aggiornano in modo diverso, e la differenza è voluta:

- PARTIAL: solo i campi non nulli del payload sovrascrivono l'entità
  (aggiornamento cliente).
- FULL_REPLACE: tutti i campi dello schema sovrascrivono l'entità, anche
  quelli lasciati al default (aggiornamento veicolo).

Ogni schema di update dichiara la propria semantica in `patch_semantics`.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class PatchSemantics(str, Enum):
    """Modalità di applicazione di un payload di update."""
    PARTIAL = "partial"
    FULL_REPLACE = "full_replace"


def apply_patch(entity: Any, payload: BaseModel, semantics: PatchSemantics) -> dict[str, Any]:
    """
    Applica un payload di update a un'entità ORM.

    Args:
        entity: Oggetto da aggiornare
        payload: Schema pydantic con i nuovi valori
        semantics: PARTIAL o FULL_REPLACE

    Returns:
        I campi effettivamente scritti sull'entità
    """
    if semantics is PatchSemantics.PARTIAL:
        changes = payload.model_dump(exclude_none=True)
    else:
        changes = payload.model_dump()

    for field, value in changes.items():
        setattr(entity, field, value)

    return changes


__all__ = ["PatchSemantics", "apply_patch"]
