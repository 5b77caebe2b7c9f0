"""
Pytest configuration and fixtures per i test del gestionale.

I service lavorano su una AsyncSession mockata: nessun database reale
viene contattato.
"""

from datetime import date
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from concessionario.models import Amministratore, Utente, Veicolo


# ============================================================
# Fixtures per AsyncSession Mock
# ============================================================


@pytest.fixture
def mock_db():
    """Crea un mock di AsyncSession."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.delete = MagicMock()
    return db


def make_result(
    one: Optional[Any] = None,
    many: Optional[list] = None,
    scalar: Optional[Any] = None,
) -> MagicMock:
    """Risultato di db.execute con i metodi usati dai service."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = one
    result.scalars.return_value.all.return_value = many or []
    result.scalar.return_value = scalar
    return result


# ============================================================
# Fixtures per le entità
# ============================================================


def make_utente(**kwargs) -> Utente:
    """Crea un Utente non persistito con dati base."""
    values = {
        "id_utente": 1,
        "codice_fiscale_utente": "RSSMRA85T10A562X",
        "nome": "Mario",
        "cognome": "Rossi",
        "data_nascita": date(1985, 12, 10),
        "telefono": "3331234567",
        "email": "mario.rossi@example.com",
        "indirizzo": "Via Roma 1, Roma",
    }
    values.update(kwargs)
    return Utente(**values)


def make_veicolo(**kwargs) -> Veicolo:
    """Crea un Veicolo non persistito con dati base."""
    values = {
        "id_veicolo": 1,
        "numero_telaio": "ZFA31200000123456",
        "marca": "Fiat",
        "modello": "Panda",
        "anno_immatricolazione": 2020,
        "chilometraggio": 45000,
        "disponibile": True,
        "id_configurazione": 3,
    }
    values.update(kwargs)
    return Veicolo(**values)


@pytest.fixture
def utente():
    return make_utente()


@pytest.fixture
def veicolo():
    return make_veicolo()


@pytest.fixture
def utente_payload():
    """Body JSON (camelCase) di un cliente valido."""
    return {
        "codiceFiscaleUtente": "bnclgu70a01a562y",
        "nome": "Luigi",
        "cognome": "Bianchi",
        "dataNascita": "1970-01-01",
        "telefono": "3471112233",
        "email": "luigi.bianchi@example.com",
        "indirizzo": "Via Milano 10, Milano",
    }


@pytest.fixture
def veicolo_payload():
    """Body JSON (camelCase) di un veicolo valido."""
    return {
        "numeroTelaio": "wvwzzz1kz6w000001",
        "marca": "Volkswagen",
        "modello": "Golf",
        "annoImmatricolazione": 2019,
        "chilometraggio": 60000,
    }


def make_amministratore(password_hash: str, **kwargs) -> Amministratore:
    values = {
        "id_amministratore": 1,
        "email": "admin@concessionario.it",
        "password": password_hash,
        "attivo": True,
    }
    values.update(kwargs)
    return Amministratore(**values)
