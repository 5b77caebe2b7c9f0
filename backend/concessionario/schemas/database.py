"""
Schemas Pydantic per gli endpoint di manutenzione database
Progetto: Concessionario (Gestionale Concessionaria)
"""

from enum import Enum

from pydantic import Field

from concessionario.schemas.common import CamelModel


class TabellaSequenza(str, Enum):
    """Tabelle la cui sequenza id può essere riallineata. Elenco chiuso."""
    MOVIMENTO = "movimento"
    CONFIGURAZIONE = "configurazione"
    AMMINISTRATORE = "amministratore"
    UTENTE = "utente"
    VEICOLO = "veicolo"


class SequenzaResetResponse(CamelModel):
    """
    Esito del riallineamento di una sequenza.

    Attributes:
        tabella: Tabella riallineata
        prossimo_id: Id che verrà assegnato al prossimo inserimento
        message: Messaggio per l'utente
    """

    tabella: TabellaSequenza
    prossimo_id: int = Field(..., ge=1)
    message: str


__all__ = ["TabellaSequenza", "SequenzaResetResponse"]
