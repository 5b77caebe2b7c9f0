"""
Router FastAPI per l'entità Utente
Progetto: Concessionario (Gestionale Concessionaria)

Definisce gli endpoint API per la gestione dei clienti.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.database import get_db
from concessionario.core.exceptions import NotFoundError
from concessionario.schemas.utente import (
    UtenteCreate,
    UtenteResponse,
    UtenteUpdate,
)
from concessionario.services.utente_service import UtenteService, get_utente_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/utenti",
    tags=["Utenti"],
)


def _not_found(codice_fiscale: str) -> NotFoundError:
    return NotFoundError(f"Utente con codice fiscale {codice_fiscale} non trovato")


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

# IMPORTANTE: GET /search deve essere definito PRIMA di GET /{codice_fiscale}
# per evitare che "search" venga interpretato come codice fiscale.

@router.get(
    "",
    name="utenti_lista",
    summary="Lista clienti",
    description=(
        "Recupera tutti i clienti. Con il parametro codiceFiscale restituisce "
        "il singolo cliente."
    ),
    response_model=Union[UtenteResponse, list[UtenteResponse]],
    status_code=status.HTTP_200_OK,
)
async def get_utenti(
    codice_fiscale: Optional[str] = Query(None, alias="codiceFiscale", description="Codice fiscale"),
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> Union[UtenteResponse, list[UtenteResponse]]:
    """
    Recupera la lista completa dei clienti, oppure un singolo cliente
    se è presente il parametro codiceFiscale.

    Raises:
        NotFoundError: Se il codice fiscale richiesto non esiste
    """
    if codice_fiscale is not None:
        utente = await service.get_by_codice_fiscale(db, codice_fiscale)
        if utente is None:
            raise _not_found(codice_fiscale)
        return UtenteResponse.model_validate(utente)

    utenti = await service.get_all(db)
    return [UtenteResponse.model_validate(u) for u in utenti]


@router.get(
    "/search",
    name="utenti_ricerca",
    summary="Ricerca clienti",
    description=(
        "Ricerca per sottostringa su un solo campo: si applica il primo "
        "filtro valorizzato tra nome, cognome ed email."
    ),
    response_model=list[UtenteResponse],
    status_code=status.HTTP_200_OK,
)
async def search_utenti(
    nome: Optional[str] = Query(None, description="Sottostringa del nome"),
    cognome: Optional[str] = Query(None, description="Sottostringa del cognome"),
    email: Optional[str] = Query(None, description="Sottostringa dell'email"),
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> list[UtenteResponse]:
    utenti = await service.search(db, nome=nome, cognome=cognome, email=email)
    return [UtenteResponse.model_validate(u) for u in utenti]


@router.get(
    "/{codice_fiscale}",
    name="utente_dettaglio",
    summary="Dettaglio cliente",
    response_model=UtenteResponse,
    status_code=status.HTTP_200_OK,
)
async def get_utente(
    codice_fiscale: str,
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> UtenteResponse:
    """
    Recupera un cliente tramite codice fiscale.

    Raises:
        NotFoundError: Se il cliente non esiste
    """
    utente = await service.get_by_codice_fiscale(db, codice_fiscale)
    if utente is None:
        raise _not_found(codice_fiscale)
    return UtenteResponse.model_validate(utente)


@router.post(
    "",
    name="utente_crea",
    summary="Crea cliente",
    response_model=UtenteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_utente(
    utente_data: UtenteCreate,
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> UtenteResponse:
    """
    Inserisce un nuovo cliente.

    Raises:
        BusinessValidationError: Se manca un campo obbligatorio (400)
        DuplicateError: Se il codice fiscale è già in uso (409)
    """
    logger.info("Ricevuta richiesta di inserimento utente: %s", utente_data.codice_fiscale_utente)
    utente = await service.insert(db, utente_data)
    await db.commit()
    return UtenteResponse.model_validate(utente)


@router.put(
    "",
    name="utente_aggiorna_query",
    summary="Aggiorna cliente (codice fiscale in query string)",
    response_model=UtenteResponse,
    status_code=status.HTTP_200_OK,
)
async def update_utente_by_query(
    utente_data: UtenteUpdate,
    codice_fiscale: str = Query(..., alias="codiceFiscale", description="Codice fiscale"),
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> UtenteResponse:
    return await update_utente(codice_fiscale, utente_data, db, service)


@router.put(
    "/{codice_fiscale}",
    name="utente_aggiorna",
    summary="Aggiorna cliente",
    description="Aggiornamento parziale: i campi assenti o nulli restano invariati.",
    response_model=UtenteResponse,
    status_code=status.HTTP_200_OK,
)
async def update_utente(
    codice_fiscale: str,
    utente_data: UtenteUpdate,
    db: AsyncSession = Depends(get_db),
    service: UtenteService = Depends(get_utente_service),
) -> UtenteResponse:
    """
    Aggiorna parzialmente un cliente.

    Raises:
        NotFoundError: Se il cliente non esiste
    """
    utente = await service.update(db, utente_data, codice_fiscale)
    if utente is None:
        raise _not_found(codice_fiscale)
    await db.commit()
    return UtenteResponse.model_validate(utente)
