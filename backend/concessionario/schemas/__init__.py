"""
Schemas Pydantic per il progetto Concessionario

Questo modulo contiene tutti gli schemi Pydantic utilizzati per la validazione
e serializzazione delle richieste e risposte API.
"""

from concessionario.schemas.common import CamelModel, MessaggioResponse
from concessionario.schemas.patch import PatchSemantics, apply_patch
from concessionario.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
    SessionPayload,
)
from concessionario.schemas.utente import UtenteCreate, UtenteResponse, UtenteUpdate
from concessionario.schemas.veicolo import VeicoloCreate, VeicoloResponse, VeicoloUpdate
from concessionario.schemas.database import SequenzaResetResponse, TabellaSequenza

__all__ = [
    "CamelModel",
    "MessaggioResponse",
    "PatchSemantics",
    "apply_patch",
    "LoginRequest",
    "LoginResponse",
    "PrincipalResponse",
    "SessionPayload",
    "UtenteCreate",
    "UtenteResponse",
    "UtenteUpdate",
    "VeicoloCreate",
    "VeicoloResponse",
    "VeicoloUpdate",
    "SequenzaResetResponse",
    "TabellaSequenza",
]
