"""
Schemas Pydantic per l'autenticazione
Progetto: Concessionario (Gestionale Concessionaria)

Schemas per login, risposta di login e payload della sessione.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """
    Credenziali inviate dal form di login.

    L'email non è validata come EmailStr: un formato errato deve produrre
    la stessa risposta di credenziali sbagliate.
    """

    email: str = Field(..., description="Email dell'amministratore")
    password: str = Field(..., description="Password in chiaro")


class LoginResponse(BaseModel):
    """
    Esito del login.

    Attributes:
        username: Email dell'amministratore autenticato, None se fallito
        success: True se il login è riuscito
        message: Messaggio per l'utente
    """

    username: Optional[str] = Field(default=None)
    success: bool
    message: str


class PrincipalResponse(BaseModel):
    """Amministratore della sessione corrente."""

    username: str


class SessionPayload(BaseModel):
    """
    Payload del token di sessione.

    Attributes:
        sub: Email dell'amministratore
        exp: Data/ora di scadenza
        type: Sempre "session"
    """

    sub: str = Field(..., description="Email amministratore")
    exp: datetime = Field(..., description="Data/ora di scadenza")
    type: str = Field(..., description="Tipo di token")


__all__ = [
    "LoginRequest",
    "LoginResponse",
    "PrincipalResponse",
    "SessionPayload",
]
