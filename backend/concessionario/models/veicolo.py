"""
Modello SQLAlchemy per l'entità Veicolo
Progetto: Concessionario (Gestionale Concessionaria)

Rappresenta i veicoli in vendita o venduti dalla concessionaria.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from concessionario.models import Base


class Veicolo(Base):
    """
    Modello per i veicoli.

    La disponibilità torna a True quando il movimento che l'aveva
    consumata viene eliminato: lo garantisce il trigger
    after_movimento_delete installato dal servizio di manutenzione.

    Attributes:
        id_veicolo: Chiave surrogata auto-incrementale
        numero_telaio: Numero di telaio (univoco)
        marca: Marca
        modello: Modello
        anno_immatricolazione: Anno di immatricolazione
        chilometraggio: Chilometri percorsi
        disponibile: True se il veicolo può essere venduto
        id_configurazione: Configurazione associata (opzionale)
    """

    __tablename__ = "veicolo"

    id_veicolo: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    numero_telaio: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        doc="Numero di telaio del veicolo",
    )

    marca: Mapped[str] = mapped_column(String(100), nullable=False)

    modello: Mapped[str] = mapped_column(String(100), nullable=False)

    anno_immatricolazione: Mapped[int] = mapped_column(Integer, nullable=False)

    chilometraggio: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    disponibile: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    id_configurazione: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("configurazione.id_configurazione", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_veicolo_disponibile", "disponibile"),
        Index("ix_veicolo_marca_modello", "marca", "modello"),
    )

    def __repr__(self) -> str:
        return (
            f"<Veicolo(id={self.id_veicolo}, numero_telaio={self.numero_telaio}, "
            f"marca={self.marca}, modello={self.modello})>"
        )
