"""
Router per l'autenticazione
Progetto: Concessionario (Gestionale Concessionaria)

Endpoints per login, logout e profilo dell'amministratore in sessione.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.config import settings
from concessionario.core.database import get_db
from concessionario.core.deps import CurrentPrincipal
from concessionario.core.exceptions import AuthenticationError
from concessionario.schemas.auth import LoginRequest, LoginResponse, PrincipalResponse
from concessionario.services.auth_service import AuthService, get_auth_service

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Effettua il login",
    responses={400: {"model": LoginResponse, "description": "Credenziali non valide"}},
)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_auth_service),
):
    """
    Effettua il login e apre la sessione tramite cookie HttpOnly.

    Qualsiasi fallimento produce 400 con username nullo, senza indicare
    se è errata l'email o la password.
    """
    try:
        username, token = await service.login(db, data.email, data.password)
    except AuthenticationError as e:
        failure = LoginResponse(username=None, success=False, message=e.detail)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure.model_dump(),
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return LoginResponse(
        username=username,
        success=True,
        message="Login effettuato con successo",
    )


@router.post(
    "/logout",
    response_model=LoginResponse,
    summary="Chiude la sessione",
)
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return LoginResponse(username=None, success=True, message="Logout effettuato con successo")


@router.get(
    "/me",
    response_model=PrincipalResponse,
    summary="Amministratore in sessione",
)
async def get_me(principal: CurrentPrincipal):
    """
    Restituisce l'amministratore della sessione corrente.

    Requires:
        Cookie di sessione valido (altrimenti 401)
    """
    return PrincipalResponse(username=principal.sub)


# Export
__all__ = ["router"]
