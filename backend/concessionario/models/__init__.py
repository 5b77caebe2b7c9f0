"""
Modelli Database SQLAlchemy
Progetto: Concessionario (Gestionale Concessionaria)

Import centralizzato di tutti i modelli.

Tutte le tabelle vivono nello schema indicato da settings.db_schema e usano
chiavi surrogate intere auto-incrementali (id_<tabella>); le chiavi esterne
verso il mondo sono codice fiscale e numero telaio.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

from concessionario.core.config import settings


class Base(DeclarativeBase):
    """Base class per tutti i modelli SQLAlchemy."""

    metadata = MetaData(schema=settings.db_schema)


# Import modelli implementati
from concessionario.models.amministratore import Amministratore
from concessionario.models.configurazione import Configurazione
from concessionario.models.utente import Utente
from concessionario.models.veicolo import Veicolo
from concessionario.models.movimento import Movimento, TipoMovimento

__all__ = [
    "Base",
    "Amministratore",
    "Configurazione",
    "Utente",
    "Veicolo",
    "Movimento",
    "TipoMovimento",
]
