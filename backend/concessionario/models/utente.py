"""
Modello SQLAlchemy per l'entità Utente
Progetto: Concessionario (Gestionale Concessionaria)

Rappresenta i clienti della concessionaria.
"""

import datetime

from sqlalchemy import Date, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from concessionario.models import Base


class Utente(Base):
    """
    Modello per i clienti (persone fisiche).

    Il codice fiscale è la chiave naturale: univoco e immutabile dopo
    l'inserimento. I clienti non vengono mai eliminati.

    Attributes:
        id_utente: Chiave surrogata auto-incrementale
        codice_fiscale_utente: Codice fiscale (univoco)
        nome: Nome
        cognome: Cognome
        data_nascita: Data di nascita
        telefono: Telefono (opzionale)
        email: Email
        indirizzo: Indirizzo di residenza
    """

    __tablename__ = "utente"

    id_utente: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    codice_fiscale_utente: Mapped[str] = mapped_column(
        String(16),
        unique=True,
        nullable=False,
        doc="Codice fiscale del cliente",
    )

    nome: Mapped[str] = mapped_column(String(100), nullable=False)

    cognome: Mapped[str] = mapped_column(String(100), nullable=False)

    data_nascita: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    telefono: Mapped[str | None] = mapped_column(String(30), nullable=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    indirizzo: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("ix_utente_cognome", "cognome"),
        Index("ix_utente_email", "email"),
    )

    def __repr__(self) -> str:
        return (
            f"<Utente(id={self.id_utente}, codice_fiscale={self.codice_fiscale_utente}, "
            f"nome={self.nome}, cognome={self.cognome})>"
        )
