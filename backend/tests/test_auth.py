"""
Tests per password, token di sessione e AuthService.
"""

import pytest
from jose import jwt

from concessionario.core.config import settings
from concessionario.core.exceptions import AuthenticationError
from concessionario.core.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from concessionario.services.auth_service import AuthService

from conftest import make_amministratore, make_result


@pytest.fixture(scope="module")
def password_hash():
    return hash_password("Segreta123!")


class TestPassword:

    def test_hash_is_salted(self, password_hash):
        assert password_hash != "Segreta123!"
        assert hash_password("Segreta123!") != password_hash

    def test_verify(self, password_hash):
        assert verify_password("Segreta123!", password_hash) is True
        assert verify_password("sbagliata", password_hash) is False

    def test_malformed_hash(self):
        assert verify_password("Segreta123!", "non-un-hash") is False


class TestSessionToken:

    def test_roundtrip(self):
        payload = decode_session_token(create_session_token("admin@concessionario.it"))

        assert payload is not None
        assert payload.sub == "admin@concessionario.it"
        assert payload.type == "session"

    def test_missing_or_invalid(self):
        assert decode_session_token(None) is None
        assert decode_session_token("") is None
        assert decode_session_token("abc.def.ghi") is None

    def test_wrong_type(self):
        token = jwt.encode(
            {"sub": "admin@concessionario.it", "type": "refresh"},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        assert decode_session_token(token) is None

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "admin@concessionario.it", "type": "session"},
            "un-altro-segreto",
            algorithm=settings.jwt_algorithm,
        )
        assert decode_session_token(token) is None


class TestAuthService:

    async def test_authenticate_ok(self, mock_db, password_hash):
        amministratore = make_amministratore(password_hash)
        mock_db.execute.return_value = make_result(one=amministratore)

        result = await AuthService().authenticate(mock_db, " admin@concessionario.it ", "Segreta123!")

        assert result is amministratore

    async def test_login_returns_token(self, mock_db, password_hash):
        mock_db.execute.return_value = make_result(one=make_amministratore(password_hash))

        username, token = await AuthService().login(mock_db, "admin@concessionario.it", "Segreta123!")

        assert username == "admin@concessionario.it"
        assert decode_session_token(token).sub == username

    async def test_failures_are_indistinguishable(self, mock_db, password_hash):
        """Test email sconosciuta, password errata e account disattivo: stesso errore."""
        details = []

        mock_db.execute.return_value = make_result(one=None)
        with pytest.raises(AuthenticationError) as unknown:
            await AuthService().authenticate(mock_db, "nessuno@concessionario.it", "Segreta123!")
        details.append((unknown.value.status_code, unknown.value.detail))

        mock_db.execute.return_value = make_result(one=make_amministratore(password_hash))
        with pytest.raises(AuthenticationError) as wrong:
            await AuthService().authenticate(mock_db, "admin@concessionario.it", "sbagliata")
        details.append((wrong.value.status_code, wrong.value.detail))

        mock_db.execute.return_value = make_result(
            one=make_amministratore(password_hash, attivo=False)
        )
        with pytest.raises(AuthenticationError) as inactive:
            await AuthService().authenticate(mock_db, "admin@concessionario.it", "Segreta123!")
        details.append((inactive.value.status_code, inactive.value.detail))

        assert details == [(400, "Credenziali non valide")] * 3
