"""
Dependency Injection per autenticazione
Progetto: Concessionario (Gestionale Concessionaria)

Funzioni di dependency injection per leggere il principal di sessione.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from concessionario.core.config import settings
from concessionario.core.exceptions import AuthorizationError
from concessionario.core.security import decode_session_token
from concessionario.schemas.auth import SessionPayload


def get_session_principal(request: Request) -> Optional[SessionPayload]:
    """
    Restituisce il principal della sessione corrente, se presente.

    Args:
        request: Richiesta HTTP con l'eventuale cookie di sessione

    Returns:
        SessionPayload oppure None per richieste anonime
    """
    return decode_session_token(request.cookies.get(settings.session_cookie_name))


def get_current_principal(
    principal: Optional[SessionPayload] = Depends(get_session_principal),
) -> SessionPayload:
    """
    Dependency per endpoint che richiedono sempre una sessione.

    Raises:
        AuthorizationError: Se non esiste una sessione valida
    """
    if principal is None:
        raise AuthorizationError("Sessione non valida o scaduta")
    return principal


# Type alias per uso comune
CurrentPrincipal = Annotated[SessionPayload, Depends(get_current_principal)]


# Export
__all__ = [
    "get_session_principal",
    "get_current_principal",
    "CurrentPrincipal",
]
