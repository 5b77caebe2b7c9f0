"""
Schemas Pydantic per l'entità Utente
Progetto: Concessionario (Gestionale Concessionaria)

Definisce gli schemi di validazione e serializzazione per l'API.
Il formato sul filo è camelCase (codiceFiscaleUtente, dataNascita, ...).
"""

import datetime
from typing import ClassVar, Optional

from pydantic import (
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from concessionario.schemas.common import CamelModel, blank_to_none
from concessionario.schemas.patch import PatchSemantics


# -------------------------------------------------------------------
# Funzioni di normalizzazione
# -------------------------------------------------------------------

def normalize_codice_fiscale(value: Optional[str]) -> Optional[str]:
    """Maiuscolo e senza spazi interni."""
    if value is None:
        return None
    return value.upper().replace(" ", "")


# -------------------------------------------------------------------
# Schemas
# -------------------------------------------------------------------
class UtenteCreate(CamelModel):
    """
    Schema per l'inserimento di un cliente.

    I campi sono tutti opzionali a livello di schema: l'obbligatorietà è
    verificata da UtenteService.insert, che risponde con un errore
    di validazione specifico per il primo campo mancante.
    """

    codice_fiscale_utente: Optional[str] = Field(
        default=None,
        max_length=16,
        description="Codice fiscale del cliente",
    )
    nome: Optional[str] = Field(default=None, max_length=100)
    cognome: Optional[str] = Field(default=None, max_length=100)
    data_nascita: Optional[datetime.date] = Field(default=None)
    telefono: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = Field(default=None)
    indirizzo: Optional[str] = Field(default=None, max_length=255)

    _blank_to_none = field_validator("*", mode="before")(blank_to_none)

    @field_validator("codice_fiscale_utente")
    @classmethod
    def validate_codice_fiscale(cls, v: Optional[str]) -> Optional[str]:
        return normalize_codice_fiscale(v)


class UtenteUpdate(CamelModel):
    """
    Schema per l'aggiornamento parziale di un cliente.

    Il codice fiscale non compare: è immutabile e identifica il cliente
    tramite il path o la query string.
    """

    patch_semantics: ClassVar[PatchSemantics] = PatchSemantics.PARTIAL

    nome: Optional[str] = Field(default=None, max_length=100)
    cognome: Optional[str] = Field(default=None, max_length=100)
    data_nascita: Optional[datetime.date] = Field(default=None)
    telefono: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = Field(default=None)
    indirizzo: Optional[str] = Field(default=None, max_length=255)

    _blank_to_none = field_validator("*", mode="before")(blank_to_none)


class UtenteResponse(CamelModel):
    """
    Schema di risposta per un cliente.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    codice_fiscale_utente: str
    nome: str
    cognome: str
    data_nascita: Optional[datetime.date] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    indirizzo: Optional[str] = None


__all__ = [
    "UtenteCreate",
    "UtenteUpdate",
    "UtenteResponse",
]
