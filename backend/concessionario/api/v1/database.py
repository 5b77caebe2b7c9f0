"""
Router FastAPI per la manutenzione del database
Progetto: Concessionario (Gestionale Concessionaria)

Endpoint una-tantum: riallineamento sequenze e installazione trigger.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.database import get_db
from concessionario.schemas.common import MessaggioResponse
from concessionario.schemas.database import SequenzaResetResponse, TabellaSequenza
from concessionario.services.database_service import DatabaseService, get_database_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/database",
    tags=["Database"],
)


async def _reset(
    tabella: TabellaSequenza,
    db: AsyncSession,
    service: DatabaseService,
) -> SequenzaResetResponse:
    prossimo_id = await service.reset_sequence(db, tabella)
    await db.commit()
    return SequenzaResetResponse(
        tabella=tabella,
        prossimo_id=prossimo_id,
        message=f"Sequenza della tabella {tabella.value} resettata con successo",
    )


@router.post(
    "/reset-{tabella}-sequence",
    name="database_reset_sequenza",
    summary="Riallinea la sequenza id di una tabella",
    description=(
        "Tabella vuota: il prossimo id sarà 1. Altrimenti max(id) + 1. "
        "Sono ammesse solo le tabelle dell'elenco."
    ),
    response_model=SequenzaResetResponse,
    status_code=status.HTTP_200_OK,
)
async def reset_sequence(
    tabella: TabellaSequenza,
    db: AsyncSession = Depends(get_db),
    service: DatabaseService = Depends(get_database_service),
) -> SequenzaResetResponse:
    return await _reset(tabella, db, service)


@router.get(
    "/reset-movimento-sequence",
    name="database_reset_movimento_legacy",
    summary="Riallinea la sequenza dei movimenti (legacy)",
    description="Alias GET mantenuto per i client esistenti; usa lo stesso percorso del POST.",
    response_model=SequenzaResetResponse,
    status_code=status.HTTP_200_OK,
    deprecated=True,
)
async def reset_movimento_sequence_legacy(
    db: AsyncSession = Depends(get_db),
    service: DatabaseService = Depends(get_database_service),
) -> SequenzaResetResponse:
    return await _reset(TabellaSequenza.MOVIMENTO, db, service)


@router.post(
    "/create-movimento-delete-trigger",
    name="database_trigger_movimento",
    summary="Installa il trigger after_movimento_delete",
    response_model=MessaggioResponse,
    status_code=status.HTTP_200_OK,
)
async def create_movimento_delete_trigger(
    db: AsyncSession = Depends(get_db),
    service: DatabaseService = Depends(get_database_service),
) -> MessaggioResponse:
    await service.create_movimento_delete_trigger(db)
    await db.commit()
    return MessaggioResponse(
        message="Trigger per l'aggiornamento della disponibilità del veicolo creato con successo"
    )
