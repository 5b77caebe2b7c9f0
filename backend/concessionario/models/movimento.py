"""
Modello SQLAlchemy per l'entità Movimento
Progetto: Concessionario (Gestionale Concessionaria)

Registra le vendite e gli acquisti che legano un cliente a un veicolo.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from concessionario.models import Base


class TipoMovimento(str, Enum):
    """Tipi di movimento."""
    VENDITA = "VENDITA"
    ACQUISTO = "ACQUISTO"


class Movimento(Base):
    """
    Modello per i movimenti (vendita/acquisto).

    Il CRUD dei movimenti non è esposto da questo backend; la tabella è
    modellata perché il trigger after_movimento_delete e il reset della
    sequenza vi fanno riferimento.

    Attributes:
        id_movimento: Chiave surrogata auto-incrementale
        tipo_movimento: VENDITA o ACQUISTO
        data_movimento: Data dell'operazione
        prezzo: Importo
        codice_fiscale_utente: Cliente intestatario
        codice_fiscale_comproprietario: Eventuale cointestatario
        numero_telaio: Veicolo coinvolto
    """

    __tablename__ = "movimento"

    id_movimento: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    tipo_movimento: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TipoMovimento.VENDITA.value,
    )

    data_movimento: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    prezzo: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    codice_fiscale_utente: Mapped[str] = mapped_column(
        String(16),
        ForeignKey("utente.codice_fiscale_utente"),
        nullable=False,
    )

    codice_fiscale_comproprietario: Mapped[Optional[str]] = mapped_column(
        String(16),
        ForeignKey("utente.codice_fiscale_utente"),
        nullable=True,
    )

    numero_telaio: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("veicolo.numero_telaio"),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_movimento_numero_telaio", "numero_telaio"),
        Index("ix_movimento_codice_fiscale_utente", "codice_fiscale_utente"),
    )

    def __repr__(self) -> str:
        return (
            f"<Movimento(id={self.id_movimento}, tipo={self.tipo_movimento}, "
            f"numero_telaio={self.numero_telaio})>"
        )
