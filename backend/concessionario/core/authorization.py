"""
Policy di autorizzazione
Progetto: Concessionario (Gestionale Concessionaria)

Tabella esplicita (pattern di route → requisito sul principal) valutata
in ordine: vince la prima regola che corrisponde al path.

ATTENZIONE: con api_auth_required=False (default) tutte le route /api/**
sono accessibili senza sessione in OGNI ambiente, produzione compresa.
È il comportamento storico del gestionale; in produzione viene emesso un
warning all'avvio finché il flag non viene attivato.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from concessionario.core.config import Settings
from concessionario.core.exceptions import AuthorizationError
from concessionario.core.security import decode_session_token
from concessionario.schemas.auth import SessionPayload

logger = logging.getLogger(__name__)

# Predicato sul principal di sessione (None = richiesta anonima)
PrincipalPredicate = Callable[[Optional[SessionPayload]], bool]


def permit_all(principal: Optional[SessionPayload]) -> bool:
    return True


def authenticated(principal: Optional[SessionPayload]) -> bool:
    return principal is not None


@dataclass(frozen=True)
class PolicyRule:
    """
    Regola della policy.

    Attributes:
        pattern: Path esatto oppure prefisso terminato da "/**"
        predicate: Requisito che il principal deve soddisfare
    """

    pattern: str
    predicate: PrincipalPredicate

    def matches(self, path: str) -> bool:
        if self.pattern.endswith("/**"):
            prefix = self.pattern[:-3]
            return path == prefix or path.startswith(prefix + "/")
        return path == self.pattern


PUBLIC_PATTERNS = (
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/static/**",
    "/login",
    "/error",
)


def build_policy(settings: Settings) -> list[PolicyRule]:
    """
    Costruisce la tabella di autorizzazione per le impostazioni date.

    L'unica differenza tra ambienti è il flag api_auth_required; il profilo
    (development/production) di per sé non cambia la tabella.
    """
    api_predicate = authenticated if settings.api_auth_required else permit_all

    rules = [PolicyRule(pattern, permit_all) for pattern in PUBLIC_PATTERNS]
    rules += [
        PolicyRule("/api/auth/login", permit_all),
        PolicyRule("/api/**", api_predicate),
        PolicyRule("/**", authenticated),
    ]
    return rules


def is_allowed(
    rules: Sequence[PolicyRule],
    path: str,
    principal: Optional[SessionPayload],
) -> bool:
    """Valuta la prima regola che corrisponde al path; nessuna regola = negato."""
    for rule in rules:
        if rule.matches(path):
            return rule.predicate(principal)
    return False


def warn_if_api_open(settings: Settings) -> None:
    """Segnala all'avvio che /api/** è pubblico anche in produzione."""
    if settings.is_production and not settings.api_auth_required:
        logger.warning(
            "Le route /api/** sono accessibili senza autenticazione in produzione "
            "(imposta API_AUTH_REQUIRED=true per proteggerle)"
        )


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """
    Middleware che applica la policy a ogni richiesta HTTP.

    Le richieste preflight CORS (OPTIONS) passano sempre.
    """

    def __init__(self, app, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings
        self.rules = build_policy(settings)

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        principal = decode_session_token(
            request.cookies.get(self.settings.session_cookie_name)
        )
        path = request.url.path

        if not is_allowed(self.rules, path, principal):
            logger.info("Accesso negato dalla policy: %s %s", request.method, path)
            error = AuthorizationError()
            return JSONResponse(
                status_code=error.status_code,
                content={"detail": error.detail, "error_code": error.error_code},
            )

        request.state.principal = principal
        return await call_next(request)


__all__ = [
    "PolicyRule",
    "permit_all",
    "authenticated",
    "build_policy",
    "is_allowed",
    "warn_if_api_open",
    "AuthorizationMiddleware",
]
