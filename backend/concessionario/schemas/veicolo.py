"""
Schemas Pydantic per l'entità Veicolo
Progetto: Concessionario (Gestionale Concessionaria)

Definisce gli schemi di validazione e serializzazione per l'API.
"""

import datetime
from typing import ClassVar, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from concessionario.schemas.common import CamelModel
from concessionario.schemas.patch import PatchSemantics


# -------------------------------------------------------------------
# Funzioni di normalizzazione e validazione
# -------------------------------------------------------------------

def numero_telaio_key(value: str) -> str:
    """Forma canonica del telaio: maiuscolo, senza spazi."""
    return value.strip().upper().replace(" ", "")


def normalize_numero_telaio(value: Optional[str]) -> Optional[str]:
    """
    Normalizza il numero di telaio in ingresso.

    Raises:
        ValueError: Se dopo la normalizzazione il valore è vuoto
    """
    if value is None:
        return None

    normalized = numero_telaio_key(value)
    if not normalized:
        raise ValueError("Il numero di telaio è obbligatorio")
    return normalized


def validate_year(year: Optional[int]) -> Optional[int]:
    """
    Valida l'anno di immatricolazione.

    L'anno deve essere >= 1900 e <= anno corrente + 1.

    Raises:
        ValueError: Se l'anno non è valido
    """
    if year is None:
        return None

    max_year = datetime.datetime.now().year + 1

    if year < 1900:
        raise ValueError("L'anno di immatricolazione deve essere >= 1900")

    if year > max_year:
        raise ValueError(
            f"L'anno di immatricolazione non può essere superiore a {max_year}"
        )

    return year


# -------------------------------------------------------------------
# Schemas
# -------------------------------------------------------------------
class VeicoloCreate(CamelModel):
    """
    Schema per l'inserimento di un veicolo.
    """

    numero_telaio: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Numero di telaio (univoco)",
    )
    marca: str = Field(..., min_length=1, max_length=100)
    modello: str = Field(..., min_length=1, max_length=100)
    anno_immatricolazione: int = Field(..., description="Anno di immatricolazione")
    chilometraggio: int = Field(default=0, ge=0)
    disponibile: bool = Field(default=True)
    id_configurazione: Optional[int] = Field(default=None)

    _normalize_numero_telaio = field_validator("numero_telaio", mode="before")(
        normalize_numero_telaio
    )
    _validate_year = field_validator("anno_immatricolazione")(validate_year)


class VeicoloUpdate(CamelModel):
    """
    Schema per l'aggiornamento di un veicolo.

    Sostituzione completa: i campi omessi non vengono ignorati ma scritti
    con il loro default (anno e chilometraggio a 0, disponibile a False,
    configurazione a null). Marca e modello restano obbligatori.
    """

    patch_semantics: ClassVar[PatchSemantics] = PatchSemantics.FULL_REPLACE

    marca: str = Field(..., min_length=1, max_length=100)
    modello: str = Field(..., min_length=1, max_length=100)
    anno_immatricolazione: int = Field(default=0, ge=0)
    chilometraggio: int = Field(default=0, ge=0)
    disponibile: bool = Field(default=False)
    id_configurazione: Optional[int] = Field(default=None)


class VeicoloResponse(CamelModel):
    """
    Schema di risposta per un veicolo.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    numero_telaio: str
    marca: str
    modello: str
    anno_immatricolazione: int
    chilometraggio: int
    disponibile: bool
    id_configurazione: Optional[int] = None


__all__ = [
    "VeicoloCreate",
    "VeicoloUpdate",
    "VeicoloResponse",
]
