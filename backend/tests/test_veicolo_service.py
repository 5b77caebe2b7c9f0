"""
Unit tests for VeicoloService.
"""

import datetime

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from concessionario.core.exceptions import BusinessValidationError, InternalError
from concessionario.schemas.veicolo import VeicoloCreate, VeicoloUpdate
from concessionario.services.veicolo_service import VeicoloService

from conftest import make_result, make_veicolo


def _create_data(**kwargs) -> VeicoloCreate:
    values = {
        "numero_telaio": " zfa312 00000123456 ",
        "marca": "Fiat",
        "modello": "Panda",
        "anno_immatricolazione": 2020,
    }
    values.update(kwargs)
    return VeicoloCreate(**values)


# ============================================================
# Tests for schemas
# ============================================================


class TestVeicoloSchemas:

    def test_numero_telaio_normalized(self):
        assert _create_data().numero_telaio == "ZFA31200000123456"

    def test_create_defaults(self):
        data = _create_data()
        assert data.chilometraggio == 0
        assert data.disponibile is True
        assert data.id_configurazione is None

    def test_year_out_of_range(self):
        with pytest.raises(ValidationError):
            _create_data(anno_immatricolazione=1850)
        with pytest.raises(ValidationError):
            _create_data(anno_immatricolazione=datetime.date.today().year + 2)

    def test_blank_numero_telaio_rejected(self):
        with pytest.raises(ValidationError):
            _create_data(numero_telaio="   ")

    def test_camel_case_aliases(self):
        data = VeicoloCreate.model_validate(
            {
                "numeroTelaio": "abc123",
                "marca": "Fiat",
                "modello": "500",
                "annoImmatricolazione": 2018,
                "idConfigurazione": 2,
            }
        )
        assert data.numero_telaio == "ABC123"
        assert data.id_configurazione == 2


# ============================================================
# Tests for insert
# ============================================================


class TestInsert:

    async def test_insert_ok(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        veicolo = await VeicoloService().insert(mock_db, _create_data())

        assert veicolo is not None
        assert veicolo.numero_telaio == "ZFA31200000123456"
        mock_db.add.assert_called_once_with(veicolo)

    async def test_insert_duplicate_returns_none(self, mock_db, veicolo):
        """Test telaio già presente → None, nessuna eccezione."""
        mock_db.execute.return_value = make_result(one=veicolo)

        assert await VeicoloService().insert(mock_db, _create_data()) is None
        mock_db.add.assert_not_called()

    async def test_insert_unique_violation_returns_none(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)
        mock_db.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception('duplicate key value violates unique constraint "veicolo_numero_telaio_key"')
        )

        assert await VeicoloService().insert(mock_db, _create_data()) is None
        mock_db.rollback.assert_awaited_once()

    async def test_insert_unknown_configurazione(self, mock_db):
        """Test configurazione inesistente → errore di validazione (400)."""
        mock_db.execute.return_value = make_result(one=None)
        mock_db.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception('violates foreign key constraint "veicolo_id_configurazione_fkey"')
        )

        with pytest.raises(BusinessValidationError) as exc_info:
            await VeicoloService().insert(mock_db, _create_data(id_configurazione=999))

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Configurazione inesistente"
        assert exc_info.value.extra == {"field": "id_configurazione"}

    async def test_insert_other_integrity_error_is_internal(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)
        mock_db.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception('new row violates check constraint "veicolo_chilometraggio_check"')
        )

        with pytest.raises(InternalError):
            await VeicoloService().insert(mock_db, _create_data())


# ============================================================
# Tests for update
# ============================================================


class TestUpdate:

    async def test_update_replaces_all_fields(self, mock_db, veicolo):
        """Test i campi omessi vengono scritti con i default."""
        mock_db.execute.return_value = make_result(one=veicolo)

        updated = await VeicoloService().update(
            mock_db, VeicoloUpdate(marca="Fiat", modello="Tipo"), veicolo.numero_telaio
        )

        assert updated.modello == "Tipo"
        assert updated.anno_immatricolazione == 0
        assert updated.chilometraggio == 0
        assert updated.disponibile is False
        assert updated.id_configurazione is None
        assert updated.numero_telaio == "ZFA31200000123456"

    async def test_update_with_all_values(self, mock_db, veicolo):
        """Test rilettura dopo l'update: coincide con il payload inviato."""
        mock_db.execute.return_value = make_result(one=veicolo)

        data = VeicoloUpdate(
            marca="Alfa Romeo",
            modello="Giulia",
            anno_immatricolazione=2022,
            chilometraggio=12000,
            disponibile=False,
            id_configurazione=5,
        )
        updated = await VeicoloService().update(mock_db, data, veicolo.numero_telaio)

        expected = data.model_dump()
        assert {field: getattr(updated, field) for field in expected} == expected
        assert expected == {
            "marca": "Alfa Romeo",
            "modello": "Giulia",
            "anno_immatricolazione": 2022,
            "chilometraggio": 12000,
            "disponibile": False,
            "id_configurazione": 5,
        }

    async def test_update_unknown_configurazione(self, mock_db, veicolo):
        """Test configurazione inesistente in update → 400, non 500."""
        mock_db.execute.return_value = make_result(one=veicolo)
        mock_db.flush.side_effect = IntegrityError(
            "UPDATE", {}, Exception('violates foreign key constraint "veicolo_id_configurazione_fkey"')
        )

        with pytest.raises(BusinessValidationError) as exc_info:
            await VeicoloService().update(
                mock_db,
                VeicoloUpdate(marca="Fiat", modello="Tipo", id_configurazione=999),
                veicolo.numero_telaio,
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Configurazione inesistente"
        mock_db.rollback.assert_awaited_once()

    async def test_update_lowercase_numero_telaio(self, mock_db, veicolo):
        """Test il telaio nel path viene normalizzato come in inserimento."""
        mock_db.execute.return_value = make_result(one=veicolo)

        updated = await VeicoloService().update(
            mock_db, VeicoloUpdate(marca="Fiat", modello="Tipo"), "zfa31200000123456"
        )

        assert updated is veicolo
        params = mock_db.execute.await_args.args[0].compile().params
        assert list(params.values()) == ["ZFA31200000123456"]

    async def test_update_missing_returns_none(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        result = await VeicoloService().update(
            mock_db, VeicoloUpdate(marca="Fiat", modello="Tipo"), "NONESISTE"
        )

        assert result is None


# ============================================================
# Tests for search
# ============================================================


class TestSearch:

    async def test_get_disponibili(self, mock_db):
        veicoli = [make_veicolo()]
        mock_db.execute.return_value = make_result(many=veicoli)

        assert await VeicoloService().get_disponibili(mock_db) == veicoli
        where = str(mock_db.execute.await_args.args[0].whereclause)
        assert "disponibile" in where

    async def test_search_combines_filters(self, mock_db):
        """Test marca e modello si combinano in AND."""
        mock_db.execute.return_value = make_result(many=[])

        await VeicoloService().search(mock_db, marca="fi", modello="pan")

        where = str(mock_db.execute.await_args.args[0].whereclause)
        assert "veicolo.marca" in where
        assert "veicolo.modello" in where
        assert " AND " in where

    async def test_search_without_filters(self, mock_db):
        mock_db.execute.return_value = make_result(many=[])

        await VeicoloService().search(mock_db)

        assert mock_db.execute.await_args.args[0].whereclause is None

    async def test_search_escapes_wildcards(self, mock_db):
        """Test % e _ nel filtro vengono cercati letteralmente."""
        mock_db.execute.return_value = make_result(many=[])

        await VeicoloService().search(mock_db, modello="50_%")

        statement = mock_db.execute.await_args.args[0]
        assert "ESCAPE" in str(statement.whereclause)
        assert list(statement.compile().params.values()) == ["50/_/%"]

    async def test_get_by_numero_telaio_normalized(self, mock_db, veicolo):
        """Test lettura con il telaio scritto come in inserimento (minuscolo, spazi)."""
        mock_db.execute.return_value = make_result(one=veicolo)

        found = await VeicoloService().get_by_numero_telaio(mock_db, " zfa312 00000123456")

        assert found is veicolo
        params = mock_db.execute.await_args.args[0].compile().params
        assert list(params.values()) == ["ZFA31200000123456"]
