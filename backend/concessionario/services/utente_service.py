"""
Service Layer per l'entità Utente
Progetto: Concessionario (Gestionale Concessionaria)

Definisce la logica di business per la gestione dei clienti:
- Validazione proattiva dei campi obbligatori
- Unicità del codice fiscale
- Ricerca a filtro singolo con precedenza nome > cognome > email
- Aggiornamento parziale (solo i campi valorizzati)
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.exceptions import (
    BusinessValidationError,
    DuplicateError,
    InternalError,
)
from concessionario.models import Utente
from concessionario.schemas.patch import apply_patch
from concessionario.schemas.utente import UtenteCreate, UtenteUpdate, normalize_codice_fiscale

# Logger per questo modulo
logger = logging.getLogger(__name__)


# Campi obbligatori all'inserimento, nell'ordine in cui vengono verificati
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("codice_fiscale_utente", "Il codice fiscale è obbligatorio"),
    ("nome", "Il nome è obbligatorio"),
    ("cognome", "Il cognome è obbligatorio"),
    ("data_nascita", "La data di nascita è obbligatoria"),
    ("email", "L'email è obbligatoria"),
    ("indirizzo", "L'indirizzo è obbligatorio"),
)


class UtenteService:
    """
    Service per la gestione delle operazioni sui clienti.

    Fornisce metodi asincroni senza dipendenze da FastAPI. Le ricerche
    puntuali restituiscono None quando il cliente non esiste: la
    traduzione in 404 spetta al router.
    """

    async def get_all(self, db: AsyncSession) -> list[Utente]:
        """
        Recupera tutti i clienti, senza paginazione.

        Args:
            db: Sessione database

        Returns:
            Lista dei clienti ordinata per cognome e nome
        """
        result = await db.execute(
            select(Utente).order_by(Utente.cognome.asc(), Utente.nome.asc())
        )
        utenti = list(result.scalars().all())

        logger.info("Lista utenti recuperata: %s clienti", len(utenti))
        return utenti

    async def get_by_codice_fiscale(
        self,
        db: AsyncSession,
        codice_fiscale: str,
    ) -> Optional[Utente]:
        """
        Recupera un cliente tramite codice fiscale.

        Args:
            db: Sessione database
            codice_fiscale: Codice fiscale del cliente

        Returns:
            Oggetto Utente, oppure None se non esiste
        """
        codice_fiscale = normalize_codice_fiscale(codice_fiscale)
        result = await db.execute(
            select(Utente).where(Utente.codice_fiscale_utente == codice_fiscale)
        )
        utente = result.scalar_one_or_none()

        if utente is None:
            logger.warning("Utente con codice fiscale %s non esistente", codice_fiscale)
        else:
            logger.debug("Utente con codice fiscale %s trovato", codice_fiscale)

        return utente

    async def search(
        self,
        db: AsyncSession,
        nome: Optional[str] = None,
        cognome: Optional[str] = None,
        email: Optional[str] = None,
    ) -> list[Utente]:
        """
        Cerca clienti per sottostringa, senza distinzione tra maiuscole e minuscole.

        I filtri NON si combinano: si applica solo il primo valorizzato
        nell'ordine nome, cognome, email. Senza filtri restituisce tutti.

        Args:
            db: Sessione database
            nome: Sottostringa del nome
            cognome: Sottostringa del cognome
            email: Sottostringa dell'email

        Returns:
            Lista dei clienti trovati
        """
        query = select(Utente)

        if nome:
            query = query.where(Utente.nome.icontains(nome, autoescape=True))
        elif cognome:
            query = query.where(Utente.cognome.icontains(cognome, autoescape=True))
        elif email:
            query = query.where(Utente.email.icontains(email, autoescape=True))

        query = query.order_by(Utente.cognome.asc(), Utente.nome.asc())
        result = await db.execute(query)
        utenti = list(result.scalars().all())

        logger.info("Ricerca utenti completata con %s risultati", len(utenti))
        return utenti

    async def insert(
        self,
        db: AsyncSession,
        utente_data: UtenteCreate,
    ) -> Utente:
        """
        Inserisce un nuovo cliente.

        Args:
            db: Sessione database
            utente_data: Dati del cliente

        Returns:
            Oggetto Utente appena creato

        Raises:
            BusinessValidationError: Se manca un campo obbligatorio
            DuplicateError: Se il codice fiscale è già registrato
            InternalError: Se il database genera un errore imprevisto
        """
        self._validate_required(utente_data)

        codice_fiscale = utente_data.codice_fiscale_utente
        existing = await self.get_by_codice_fiscale(db, codice_fiscale)
        if existing is not None:
            logger.warning(
                "Tentativo di inserire utente con codice fiscale duplicato: %s",
                codice_fiscale,
            )
            raise DuplicateError(f"Codice fiscale '{codice_fiscale}' già in uso")

        utente = Utente(**utente_data.model_dump())

        try:
            db.add(utente)
            await db.flush()
            await db.refresh(utente)

        except IntegrityError as e:
            logger.warning("IntegrityError inserimento utente %s: %s", codice_fiscale, e.orig)
            await db.rollback()
            raise DuplicateError(f"Codice fiscale '{codice_fiscale}' già in uso")

        except SQLAlchemyError as e:
            logger.error(
                "Errore SQLAlchemy inserimento utente: %s - %s",
                e.__class__.__name__, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError("Errore durante il salvataggio dell'utente")

        logger.info("Utente con codice fiscale %s inserito correttamente", codice_fiscale)
        return utente

    async def update(
        self,
        db: AsyncSession,
        utente_data: UtenteUpdate,
        codice_fiscale: str,
    ) -> Optional[Utente]:
        """
        Aggiorna parzialmente un cliente.

        Solo i campi valorizzati nel payload sovrascrivono quelli esistenti.

        Args:
            db: Sessione database
            utente_data: Campi da aggiornare
            codice_fiscale: Codice fiscale del cliente

        Returns:
            Oggetto Utente aggiornato, oppure None se il cliente non esiste

        Raises:
            InternalError: Se il database genera un errore imprevisto
        """
        utente = await self.get_by_codice_fiscale(db, codice_fiscale)
        if utente is None:
            logger.error(
                "Utente con codice fiscale %s non trovato per l'aggiornamento",
                codice_fiscale,
            )
            return None

        changes = apply_patch(utente, utente_data, UtenteUpdate.patch_semantics)

        try:
            await db.flush()
            await db.refresh(utente)

        except SQLAlchemyError as e:
            logger.error(
                "Errore SQLAlchemy aggiornamento utente: %s - %s",
                e.__class__.__name__, e,
                exc_info=True,
            )
            await db.rollback()
            raise InternalError("Errore durante l'aggiornamento dell'utente")

        logger.info(
            "Utente con codice fiscale %s aggiornato correttamente (campi: %s)",
            codice_fiscale, ", ".join(sorted(changes)) or "nessuno",
        )
        return utente

    # ----------------------------------------------------------------
    # Metodi privati di supporto
    # ----------------------------------------------------------------

    @staticmethod
    def _validate_required(utente_data: UtenteCreate) -> None:
        """
        Verifica i campi obbligatori, segnalando il primo mancante.

        Raises:
            BusinessValidationError: Se un campo è assente o vuoto
        """
        for field, message in REQUIRED_FIELDS:
            value = getattr(utente_data, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                logger.error(message)
                raise BusinessValidationError(message, extra={"field": field})


def get_utente_service() -> UtenteService:
    """
    Dependency per ottenere un'istanza dello UtenteService.
    """
    return UtenteService()


__all__ = ["UtenteService", "get_utente_service"]
