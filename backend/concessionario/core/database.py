"""
Accesso al database PostgreSQL
Progetto: Concessionario (Gestionale Concessionaria)

Engine async, factory delle sessioni e dependency `get_db`.

Ogni connessione lavora con search_path impostato sullo schema del
gestionale, così anche l'SQL testuale (setval, trigger) trova le tabelle
senza qualificarle.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from concessionario.core.config import settings

logger = logging.getLogger(__name__)

# Trigger da cui dipende la disponibilità dei veicoli
MOVIMENTO_TRIGGER = "after_movimento_delete"


engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    connect_args={"server_settings": {"search_path": f"{settings.db_schema},public"}},
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Una sessione per richiesta.

    Il commit spetta al router dopo una mutazione riuscita; qualsiasi
    eccezione annulla la transazione in corso.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Controlli all'avvio.

    Verifica la connessione e segnala se il trigger after_movimento_delete
    manca: senza di esso l'eliminazione di un movimento non rimette in
    vendita il veicolo.

    Raises:
        Exception: Se il database non è raggiungibile
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            result = await conn.execute(
                text(
                    "SELECT 1 FROM pg_trigger t "
                    "JOIN pg_class c ON c.oid = t.tgrelid "
                    "JOIN pg_namespace n ON n.oid = c.relnamespace "
                    "WHERE t.tgname = :trigger AND n.nspname = :schema"
                ),
                {"trigger": MOVIMENTO_TRIGGER, "schema": settings.db_schema},
            )
            trigger_installed = result.first() is not None
    except Exception as e:
        logger.error("Errore connessione database: %s", e)
        raise

    logger.info("Connessione al database stabilita (schema %s)", settings.db_schema)
    if not trigger_installed:
        logger.warning(
            "Trigger %s assente: usare POST /api/database/create-movimento-delete-trigger",
            MOVIMENTO_TRIGGER,
        )


async def close_db() -> None:
    """Chiude il pool di connessioni allo shutdown."""
    await engine.dispose()
    logger.info("Connessioni database chiuse")
