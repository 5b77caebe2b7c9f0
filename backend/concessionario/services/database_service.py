"""
Servizio di manutenzione database
Progetto: Concessionario (Gestionale Concessionaria)

Operazioni una-tantum sullo schema PostgreSQL:
- riallineamento delle sequenze id delle tabelle
- installazione del trigger che ripristina la disponibilità dei veicoli
  quando un movimento viene eliminato

Le tabelle ammesse sono solo quelle di TabellaSequenza; nessun nome di
tabella arriva mai dal chiamante dentro una stringa SQL.
"""

import logging

from sqlalchemy import Column, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.database import MOVIMENTO_TRIGGER
from concessionario.core.exceptions import InternalError
from concessionario.models import Amministratore, Configurazione, Movimento, Utente, Veicolo
from concessionario.schemas.database import TabellaSequenza

logger = logging.getLogger(__name__)


# Colonna id di ogni tabella riallineabile
SEQUENCE_COLUMNS: dict[TabellaSequenza, Column] = {
    TabellaSequenza.MOVIMENTO: Movimento.__table__.c.id_movimento,
    TabellaSequenza.CONFIGURAZIONE: Configurazione.__table__.c.id_configurazione,
    TabellaSequenza.AMMINISTRATORE: Amministratore.__table__.c.id_amministratore,
    TabellaSequenza.UTENTE: Utente.__table__.c.id_utente,
    TabellaSequenza.VEICOLO: Veicolo.__table__.c.id_veicolo,
}

SETVAL_SQL = text(
    "SELECT setval(pg_get_serial_sequence(:tabella, :colonna), :valore, false)"
)

TRIGGER_NAME = MOVIMENTO_TRIGGER
TRIGGER_FUNCTION = "ripristina_disponibilita_veicolo"


def next_sequence_value(max_id: int | None) -> int:
    """Tabella vuota → 1, altrimenti max(id) + 1."""
    return 1 if max_id is None else max_id + 1


def movimento_delete_trigger_statements() -> list[str]:
    """
    DDL del trigger after_movimento_delete, nell'ordine di esecuzione.

    Drop-if-exists prima del create: rieseguire l'installazione è sicuro.
    """
    movimento = Movimento.__table__.fullname
    veicolo = Veicolo.__table__.fullname
    schema = Movimento.__table__.schema
    function = f"{schema}.{TRIGGER_FUNCTION}" if schema else TRIGGER_FUNCTION

    return [
        f"CREATE OR REPLACE FUNCTION {function}() RETURNS trigger AS $$ "
        f"BEGIN "
        f"UPDATE {veicolo} SET disponibile = true WHERE numero_telaio = OLD.numero_telaio; "
        f"RETURN OLD; "
        f"END; $$ LANGUAGE plpgsql",
        f"DROP TRIGGER IF EXISTS {TRIGGER_NAME} ON {movimento}",
        f"CREATE TRIGGER {TRIGGER_NAME} AFTER DELETE ON {movimento} "
        f"FOR EACH ROW EXECUTE FUNCTION {function}()",
    ]


class DatabaseService:
    """Servizio per le operazioni di manutenzione dello schema."""

    async def reset_sequence(self, db: AsyncSession, tabella: TabellaSequenza) -> int:
        """
        Riallinea la sequenza id di una tabella.

        Lettura del massimo e setval avvengono nella stessa transazione
        (commit a carico del chiamante).

        Args:
            db: Sessione database
            tabella: Tabella da riallineare

        Returns:
            L'id che verrà assegnato al prossimo inserimento

        Raises:
            InternalError: Se il database rifiuta l'operazione
        """
        column = SEQUENCE_COLUMNS[tabella]
        table = column.table

        try:
            result = await db.execute(select(func.max(column)))
            prossimo_id = next_sequence_value(result.scalar())

            await db.execute(
                SETVAL_SQL,
                {"tabella": table.fullname, "colonna": column.name, "valore": prossimo_id},
            )

        except SQLAlchemyError as e:
            logger.error(
                "Errore reset sequenza %s: %s - %s",
                tabella.value, e.__class__.__name__, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError(f"Errore durante il reset della sequenza {tabella.value}")

        logger.info("Sequenza %s reimpostata: prossimo id %s", tabella.value, prossimo_id)
        return prossimo_id

    async def create_movimento_delete_trigger(self, db: AsyncSession) -> None:
        """
        Installa (o reinstalla) il trigger che, dopo l'eliminazione di un
        movimento, rimette disponibile il veicolo collegato.

        Raises:
            InternalError: Se il database rifiuta il DDL
        """
        try:
            for statement in movimento_delete_trigger_statements():
                await db.execute(text(statement))

        except SQLAlchemyError as e:
            logger.error(
                "Errore nella creazione del trigger %s: %s",
                TRIGGER_NAME, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError("Errore durante la creazione del trigger")

        logger.info("Trigger %s creato con successo", TRIGGER_NAME)


def get_database_service() -> DatabaseService:
    """
    Dependency per ottenere un'istanza del DatabaseService.
    """
    return DatabaseService()


__all__ = [
    "DatabaseService",
    "get_database_service",
    "next_sequence_value",
    "movimento_delete_trigger_statements",
]
