"""
Schemas Pydantic condivisi
Progetto: Concessionario (Gestionale Concessionaria)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def blank_to_none(value: Any) -> Any:
    """Le stringhe vuote o di soli spazi valgono come campo assente."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class CamelModel(BaseModel):
    """Base per gli schemi esposti sul filo con alias camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessaggioResponse(BaseModel):
    """Risposta testuale degli endpoint di servizio."""

    message: str = Field(..., description="Esito dell'operazione")


__all__ = ["blank_to_none", "CamelModel", "MessaggioResponse"]
