"""
Router FastAPI per l'entità Veicolo
Progetto: Concessionario (Gestionale Concessionaria)

Definisce gli endpoint API per la gestione dei veicoli.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.database import get_db
from concessionario.core.exceptions import DuplicateError, NotFoundError
from concessionario.schemas.veicolo import (
    VeicoloCreate,
    VeicoloResponse,
    VeicoloUpdate,
)
from concessionario.services.veicolo_service import veicolo_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/veicoli",
    tags=["Veicoli"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

# IMPORTANTE: /disponibili e /search vanno definiti PRIMA di /{numero_telaio}.

@router.get(
    "",
    name="veicoli_lista",
    summary="Lista veicoli",
    response_model=list[VeicoloResponse],
    status_code=status.HTTP_200_OK,
)
async def get_veicoli(
    db: AsyncSession = Depends(get_db),
) -> list[VeicoloResponse]:
    veicoli = await veicolo_service.get_all(db)
    return [VeicoloResponse.model_validate(v) for v in veicoli]


@router.get(
    "/disponibili",
    name="veicoli_disponibili",
    summary="Veicoli disponibili",
    response_model=list[VeicoloResponse],
    status_code=status.HTTP_200_OK,
)
async def get_veicoli_disponibili(
    db: AsyncSession = Depends(get_db),
) -> list[VeicoloResponse]:
    veicoli = await veicolo_service.get_disponibili(db)
    return [VeicoloResponse.model_validate(v) for v in veicoli]


@router.get(
    "/search",
    name="veicoli_ricerca",
    summary="Ricerca veicoli",
    description="Tutti i filtri valorizzati devono essere soddisfatti (AND).",
    response_model=list[VeicoloResponse],
    status_code=status.HTTP_200_OK,
)
async def search_veicoli(
    numero_telaio: Optional[str] = Query(None, alias="numeroTelaio", description="Sottostringa del telaio"),
    marca: Optional[str] = Query(None, description="Sottostringa della marca"),
    modello: Optional[str] = Query(None, description="Sottostringa del modello"),
    db: AsyncSession = Depends(get_db),
) -> list[VeicoloResponse]:
    veicoli = await veicolo_service.search(
        db,
        numero_telaio=numero_telaio,
        marca=marca,
        modello=modello,
    )
    return [VeicoloResponse.model_validate(v) for v in veicoli]


@router.get(
    "/{numero_telaio}",
    name="veicolo_dettaglio",
    summary="Dettaglio veicolo",
    response_model=VeicoloResponse,
    status_code=status.HTTP_200_OK,
)
async def get_veicolo(
    numero_telaio: str,
    db: AsyncSession = Depends(get_db),
) -> VeicoloResponse:
    """
    Recupera un veicolo tramite numero di telaio.

    Raises:
        NotFoundError: Se il veicolo non esiste
    """
    veicolo = await veicolo_service.get_by_numero_telaio(db, numero_telaio)
    if veicolo is None:
        raise NotFoundError(f"Veicolo con telaio {numero_telaio} non trovato")
    return VeicoloResponse.model_validate(veicolo)


@router.post(
    "",
    name="veicolo_crea",
    summary="Crea veicolo",
    response_model=VeicoloResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_veicolo(
    veicolo_data: VeicoloCreate,
    db: AsyncSession = Depends(get_db),
) -> VeicoloResponse:
    """
    Inserisce un nuovo veicolo.

    Raises:
        DuplicateError: Se il numero di telaio è già registrato (409)
    """
    veicolo = await veicolo_service.insert(db, veicolo_data)
    if veicolo is None:
        raise DuplicateError(f"Numero di telaio '{veicolo_data.numero_telaio}' già registrato")
    await db.commit()
    return VeicoloResponse.model_validate(veicolo)


@router.put(
    "/{numero_telaio}",
    name="veicolo_aggiorna",
    summary="Aggiorna veicolo",
    description="Sostituzione completa dei campi modificabili del veicolo.",
    response_model=VeicoloResponse,
    status_code=status.HTTP_200_OK,
)
async def update_veicolo(
    numero_telaio: str,
    veicolo_data: VeicoloUpdate,
    db: AsyncSession = Depends(get_db),
) -> VeicoloResponse:
    """
    Aggiorna un veicolo esistente.

    Raises:
        NotFoundError: Se il veicolo non esiste
    """
    veicolo = await veicolo_service.update(db, veicolo_data, numero_telaio)
    if veicolo is None:
        raise NotFoundError(f"Veicolo con telaio {numero_telaio} non trovato")
    await db.commit()
    return VeicoloResponse.model_validate(veicolo)
