# prestamos/models/movimiento_caja_model.py
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from prestamos.utils.database import Base


class MovimientoCaja(Base):
    __tablename__ = "movimientos_caja"

    id = Column(Integer, primary_key=True, index=True)

    # INGRESO / EGRESO
    tipo = Column(String(10), nullable=False)
    # PRESTAMO / PAGO / NOMINA / GASOLINA / OTRO
    categoria = Column(String(50), nullable=False)

    monto = Column(Numeric(12, 2), nullable=False)

    # optional references, no FK so that deleting a loan keeps the cash history
    prestamo_id = Column(Integer, nullable=True)
    cliente_id = Column(Integer, nullable=True)

    descripcion = Column(Text, nullable=True)
    fecha = Column(DateTime, server_default=func.now(), nullable=False)
    creado_por = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    __table_args__ = (
        Index("ix_movimientos_caja_fecha", "fecha"),
        Index("ix_movimientos_caja_tipo", "tipo"),
    )

    def __repr__(self) -> str:
        return f"<MovimientoCaja(id={self.id}, tipo={self.tipo}, monto={self.monto})>"
