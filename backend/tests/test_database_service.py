"""
Unit tests for DatabaseService (sequenze e trigger).
"""

import pytest
from sqlalchemy.exc import ProgrammingError

from concessionario.core.exceptions import InternalError
from concessionario.models import Movimento, Utente, Veicolo
from concessionario.schemas.database import TabellaSequenza
from concessionario.services.database_service import (
    TRIGGER_NAME,
    DatabaseService,
    movimento_delete_trigger_statements,
    next_sequence_value,
)

from conftest import make_result


class TestNextSequenceValue:

    def test_empty_table_starts_from_one(self):
        assert next_sequence_value(None) == 1

    def test_after_max(self):
        assert next_sequence_value(7) == 8


class TestResetSequence:

    async def test_reset_empty_table(self, mock_db):
        mock_db.execute.side_effect = [make_result(scalar=None), make_result()]

        prossimo_id = await DatabaseService().reset_sequence(mock_db, TabellaSequenza.UTENTE)

        assert prossimo_id == 1
        params = mock_db.execute.await_args_list[1].args[1]
        assert params == {
            "tabella": Utente.__table__.fullname,
            "colonna": "id_utente",
            "valore": 1,
        }

    async def test_reset_after_max(self, mock_db):
        mock_db.execute.side_effect = [make_result(scalar=7), make_result()]

        prossimo_id = await DatabaseService().reset_sequence(mock_db, TabellaSequenza.MOVIMENTO)

        assert prossimo_id == 8
        params = mock_db.execute.await_args_list[1].args[1]
        assert params["tabella"] == Movimento.__table__.fullname
        assert params["colonna"] == "id_movimento"
        assert params["valore"] == 8

    async def test_reset_database_error(self, mock_db):
        mock_db.execute.side_effect = ProgrammingError("SELECT", {}, Exception("boom"))

        with pytest.raises(InternalError):
            await DatabaseService().reset_sequence(mock_db, TabellaSequenza.VEICOLO)

        mock_db.rollback.assert_awaited_once()

    def test_only_known_tables(self):
        with pytest.raises(ValueError):
            TabellaSequenza("clienti; DROP TABLE utente")


class TestMovimentoDeleteTrigger:

    def test_statements_order(self):
        statements = movimento_delete_trigger_statements()

        assert len(statements) == 3
        assert statements[0].startswith("CREATE OR REPLACE FUNCTION")
        assert statements[1] == f"DROP TRIGGER IF EXISTS {TRIGGER_NAME} ON {Movimento.__table__.fullname}"
        assert statements[2].startswith(f"CREATE TRIGGER {TRIGGER_NAME} AFTER DELETE")

    def test_function_restores_availability(self):
        function = movimento_delete_trigger_statements()[0]

        assert f"UPDATE {Veicolo.__table__.fullname} SET disponibile = true" in function
        assert "OLD.numero_telaio" in function
        assert "LANGUAGE plpgsql" in function

    async def test_create_trigger_executes_all_statements(self, mock_db):
        await DatabaseService().create_movimento_delete_trigger(mock_db)

        assert mock_db.execute.await_count == 3

    async def test_create_trigger_twice(self, mock_db):
        """Test reinstallazione: stesse istruzioni, nessun errore."""
        service = DatabaseService()
        await service.create_movimento_delete_trigger(mock_db)
        await service.create_movimento_delete_trigger(mock_db)

        executed = [str(call.args[0]) for call in mock_db.execute.await_args_list]
        assert executed[:3] == executed[3:]

    async def test_create_trigger_database_error(self, mock_db):
        mock_db.execute.side_effect = ProgrammingError("CREATE", {}, Exception("permission denied"))

        with pytest.raises(InternalError):
            await DatabaseService().create_movimento_delete_trigger(mock_db)
