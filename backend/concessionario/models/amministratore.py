"""
Modello SQLAlchemy per l'entità Amministratore
Progetto: Concessionario (Gestionale Concessionaria)

Credenziali degli amministratori che accedono al gestionale.
"""

from sqlalchemy import Boolean, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from concessionario.models import Base


class Amministratore(Base):
    """
    Modello per gli amministratori del sistema.

    Attributes:
        id_amministratore: Chiave surrogata auto-incrementale
        email: Email univoca, usata come username
        password: Password hashata con bcrypt
        nome: Nome (opzionale)
        cognome: Cognome (opzionale)
        attivo: Gli amministratori disattivati non possono accedere
    """

    __tablename__ = "amministratore"

    id_amministratore: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Password hashata (bcrypt)",
    )

    nome: Mapped[str | None] = mapped_column(String(100), nullable=True)

    cognome: Mapped[str | None] = mapped_column(String(100), nullable=True)

    attivo: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    def __repr__(self) -> str:
        return f"<Amministratore(id={self.id_amministratore}, email={self.email})>"
