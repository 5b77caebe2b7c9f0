"""
API v1 Routes
Progetto: Concessionario (Gestionale Concessionaria)

Router della prima versione dell'API. Le route sono montate sotto /api,
senza numero di versione nel path, come si aspetta il frontend.
"""

from fastapi import APIRouter

from concessionario.api.v1 import auth, database, utenti, veicoli

# Router aggregato per v1
api_v1_router = APIRouter(prefix="/api")

# Includi i router dei moduli
api_v1_router.include_router(auth.router)
api_v1_router.include_router(utenti.router)
api_v1_router.include_router(veicoli.router)
api_v1_router.include_router(database.router)

# Esportazione
__all__ = ["api_v1_router"]
