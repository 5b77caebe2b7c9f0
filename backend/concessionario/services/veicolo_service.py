"""
Service Layer per l'entità Veicolo
Progetto: Concessionario (Gestionale Concessionaria)

Definisce la logica di business per la gestione dei veicoli.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.exceptions import BusinessValidationError, InternalError
from concessionario.models import Veicolo
from concessionario.schemas.patch import apply_patch
from concessionario.schemas.veicolo import VeicoloCreate, VeicoloUpdate, numero_telaio_key

# Logger per questo modulo
logger = logging.getLogger(__name__)


def violates_configurazione_fk(error: IntegrityError) -> bool:
    """L'unica chiave esterna di veicolo punta a configurazione."""
    message = str(error.orig).lower()
    return "foreign key" in message or "id_configurazione" in message


class VeicoloService:
    """
    Service per la gestione delle operazioni sui veicoli.

    A differenza dei clienti:
    - la ricerca combina in AND tutti i filtri forniti;
    - l'aggiornamento sostituisce tutti i campi modificabili;
    - un telaio duplicato all'inserimento restituisce None invece di
      sollevare un'eccezione.
    """

    async def get_all(self, db: AsyncSession) -> list[Veicolo]:
        """
        Recupera tutti i veicoli.
        """
        result = await db.execute(select(Veicolo).order_by(Veicolo.numero_telaio.asc()))
        veicoli = list(result.scalars().all())

        logger.debug("Recuperati %s veicoli", len(veicoli))
        return veicoli

    async def get_disponibili(self, db: AsyncSession) -> list[Veicolo]:
        """
        Recupera i veicoli con disponibile = True.
        """
        result = await db.execute(
            select(Veicolo)
            .where(Veicolo.disponibile.is_(True))
            .order_by(Veicolo.numero_telaio.asc())
        )
        veicoli = list(result.scalars().all())

        logger.debug("Recuperati %s veicoli disponibili", len(veicoli))
        return veicoli

    async def get_by_numero_telaio(
        self,
        db: AsyncSession,
        numero_telaio: str,
    ) -> Optional[Veicolo]:
        """
        Recupera un veicolo tramite numero di telaio.

        Args:
            db: Sessione database
            numero_telaio: Numero di telaio

        Returns:
            Oggetto Veicolo, oppure None se non esiste
        """
        numero_telaio = numero_telaio_key(numero_telaio)
        result = await db.execute(
            select(Veicolo).where(Veicolo.numero_telaio == numero_telaio)
        )
        veicolo = result.scalar_one_or_none()

        if veicolo is None:
            logger.warning("Veicolo non trovato: %s", numero_telaio)

        return veicolo

    async def search(
        self,
        db: AsyncSession,
        numero_telaio: Optional[str] = None,
        marca: Optional[str] = None,
        modello: Optional[str] = None,
    ) -> list[Veicolo]:
        """
        Cerca veicoli combinando in AND i filtri forniti.

        Ogni filtro è una sottostringa case-insensitive; i filtri vuoti
        sono ignorati.

        Args:
            db: Sessione database
            numero_telaio: Sottostringa del numero di telaio
            marca: Sottostringa della marca
            modello: Sottostringa del modello

        Returns:
            Lista dei veicoli che soddisfano tutti i filtri
        """
        conditions = []

        if numero_telaio:
            conditions.append(Veicolo.numero_telaio.icontains(numero_telaio, autoescape=True))
        if marca:
            conditions.append(Veicolo.marca.icontains(marca, autoescape=True))
        if modello:
            conditions.append(Veicolo.modello.icontains(modello, autoescape=True))

        query = select(Veicolo)
        if conditions:
            query = query.where(*conditions)
        query = query.order_by(Veicolo.numero_telaio.asc())

        result = await db.execute(query)
        veicoli = list(result.scalars().all())

        logger.info("Ricerca veicoli completata con %s risultati", len(veicoli))
        return veicoli

    async def insert(
        self,
        db: AsyncSession,
        veicolo_data: VeicoloCreate,
    ) -> Optional[Veicolo]:
        """
        Inserisce un nuovo veicolo.

        Args:
            db: Sessione database
            veicolo_data: Dati del veicolo

        Returns:
            Oggetto Veicolo appena creato, oppure None se il numero di
            telaio è già registrato

        Raises:
            BusinessValidationError: Se la configurazione indicata non esiste
            InternalError: Se il database genera un errore imprevisto
        """
        numero_telaio = veicolo_data.numero_telaio

        existing = await self.get_by_numero_telaio(db, numero_telaio)
        if existing is not None:
            logger.warning("Numero di telaio già registrato: %s", numero_telaio)
            return None

        veicolo = Veicolo(**veicolo_data.model_dump())

        try:
            db.add(veicolo)
            await db.flush()
            await db.refresh(veicolo)

        except IntegrityError as e:
            await db.rollback()
            if "numero_telaio" in str(e.orig).lower():
                logger.warning("Numero di telaio duplicato in inserimento: %s", numero_telaio)
                return None
            if violates_configurazione_fk(e):
                logger.warning("Configurazione inesistente: %s", veicolo_data.id_configurazione)
                raise BusinessValidationError(
                    "Configurazione inesistente", extra={"field": "id_configurazione"}
                )
            logger.error("Errore inserimento veicolo - errore DB: %s", e.orig)
            raise InternalError("Errore durante il salvataggio del veicolo")

        except SQLAlchemyError as e:
            logger.error(
                "Errore SQLAlchemy inserimento veicolo: %s - %s",
                e.__class__.__name__, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError("Errore durante il salvataggio del veicolo")

        logger.info("Creato nuovo veicolo: %s", numero_telaio)
        return veicolo

    async def update(
        self,
        db: AsyncSession,
        veicolo_data: VeicoloUpdate,
        numero_telaio: str,
    ) -> Optional[Veicolo]:
        """
        Sostituisce i campi modificabili di un veicolo.

        Marca, modello, anno, chilometraggio, disponibilità e configurazione
        vengono sempre riscritti con i valori del payload.

        Args:
            db: Sessione database
            veicolo_data: Nuovi valori
            numero_telaio: Numero di telaio del veicolo

        Returns:
            Oggetto Veicolo aggiornato, oppure None se non esiste

        Raises:
            BusinessValidationError: Se la configurazione indicata non esiste
            InternalError: Se il database genera un errore imprevisto
        """
        veicolo = await self.get_by_numero_telaio(db, numero_telaio)
        if veicolo is None:
            return None

        apply_patch(veicolo, veicolo_data, VeicoloUpdate.patch_semantics)

        try:
            await db.flush()
            await db.refresh(veicolo)

        except IntegrityError as e:
            await db.rollback()
            if violates_configurazione_fk(e):
                logger.warning("Configurazione inesistente: %s", veicolo_data.id_configurazione)
                raise BusinessValidationError(
                    "Configurazione inesistente", extra={"field": "id_configurazione"}
                )
            logger.error("Errore aggiornamento veicolo - errore DB: %s", e.orig)
            raise InternalError("Errore durante l'aggiornamento del veicolo")

        except SQLAlchemyError as e:
            logger.error(
                "Errore SQLAlchemy aggiornamento veicolo: %s - %s",
                e.__class__.__name__, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError("Errore durante l'aggiornamento del veicolo")

        logger.info("Aggiornato veicolo: %s", numero_telaio)
        return veicolo


# Istanza globale del service
veicolo_service = VeicoloService()
