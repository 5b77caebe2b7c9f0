"""
Modulo di sicurezza per password e sessione
Progetto: Concessionario (Gestionale Concessionaria)

Funzioni per hashing password e gestione del token di sessione JWT
trasportato nel cookie dell'amministratore.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from concessionario.core.config import settings
from concessionario.schemas.auth import SessionPayload

# Context per hashing password (bcrypt, salt incluso nell'hash)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hasha una password in chiaro.

    Args:
        password: Password in chiaro

    Returns:
        Password hashata
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica una password in chiaro contro una hashata.

    Un hash malformato conta come password errata.

    Args:
        plain_password: Password in chiaro
        hashed_password: Password hashata

    Returns:
        True se la password corrisponde, False altrimenti
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_session_token(username: str) -> str:
    """
    Crea il token di sessione per l'amministratore autenticato.

    Args:
        username: Email dell'amministratore

    Returns:
        Token JWT codificato
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.session_expire_minutes
    )

    payload = {
        "sub": username,
        "exp": expire,
        "type": "session",
    }

    return jwt.encode(
        payload,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_session_token(token: Optional[str]) -> Optional[SessionPayload]:
    """
    Decodifica e valida un token di sessione.

    Args:
        token: Token JWT letto dal cookie (può mancare)

    Returns:
        SessionPayload se il token è valido, None se assente, scaduto o manomesso
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if not payload.get("sub") or payload.get("type") != "session":
        return None

    return SessionPayload(
        sub=payload["sub"],
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        type=payload["type"],
    )


# Export delle funzioni
__all__ = [
    "hash_password",
    "verify_password",
    "create_session_token",
    "decode_session_token",
]
