"""
Modello SQLAlchemy per l'entità Configurazione
Progetto: Concessionario (Gestionale Concessionaria)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from concessionario.models import Base


class Configurazione(Base):
    """
    Allestimento a cui un veicolo può fare riferimento.

    Gestito da un'altra parte del gestionale: qui serve solo come
    destinazione della chiave esterna e per il reset della sequenza.
    """

    __tablename__ = "configurazione"

    id_configurazione: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    nome_configurazione: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Configurazione(id={self.id_configurazione}, nome={self.nome_configurazione})>"
