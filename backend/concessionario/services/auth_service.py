"""
Servizio per l'autenticazione
Progetto: Concessionario (Gestionale Concessionaria)

Business logic per login degli amministratori e creazione della sessione.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.core.exceptions import AuthenticationError
from concessionario.core.security import create_session_token, verify_password
from concessionario.models import Amministratore

logger = logging.getLogger(__name__)


class AuthService:
    """Servizio per la gestione dell'autenticazione."""

    async def authenticate(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> Amministratore:
        """
        Verifica le credenziali di un amministratore.

        Email sconosciuta, password errata e account disattivato producono
        lo stesso errore, per non rivelare quale parte è sbagliata.

        Args:
            db: Sessione database
            email: Email dell'amministratore
            password: Password in chiaro

        Returns:
            L'amministratore autenticato

        Raises:
            AuthenticationError: Se le credenziali non sono valide
        """
        result = await db.execute(
            select(Amministratore).where(Amministratore.email == email.strip())
        )
        amministratore = result.scalar_one_or_none()

        if (
            amministratore is None
            or not verify_password(password, amministratore.password)
            or not amministratore.attivo
        ):
            logger.info("Login fallito per %s", email)
            raise AuthenticationError()

        logger.info("Login effettuato: %s", amministratore.email)
        return amministratore

    async def login(self, db: AsyncSession, email: str, password: str) -> tuple[str, str]:
        """
        Autentica e genera il token di sessione.

        Returns:
            Tupla (username, token di sessione)

        Raises:
            AuthenticationError: Se le credenziali non sono valide
        """
        amministratore = await self.authenticate(db, email, password)
        return amministratore.email, create_session_token(amministratore.email)


def get_auth_service() -> AuthService:
    """
    Factory per ottenere un'istanza del servizio di autenticazione.
    """
    return AuthService()


# Export
__all__ = [
    "AuthService",
    "get_auth_service",
]
