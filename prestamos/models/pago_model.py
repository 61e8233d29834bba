from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, Boolean, ForeignKey
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from prestamos.utils.database import Base


class Pago(Base):
    __tablename__ = "pagos"

    id = Column(Integer, primary_key=True, index=True)
    prestamo_id = Column(Integer, ForeignKey("prestamos.id", ondelete="CASCADE"), nullable=False, index=True)

    monto_pagado = Column(Numeric(10, 2), nullable=False)
    monto_mora = Column(Numeric(10, 2), nullable=False, default=0)

    fecha_pago = Column(DateTime, server_default=func.now(), nullable=False)
    numero_semana = Column(Integer, nullable=False, default=1)

    # A_TIEMPO / ATRASADO
    estado = Column(String(20), nullable=False, default="A_TIEMPO")

    es_pago_parcial = Column(Boolean, nullable=False, default=False)
    monto_restante = Column(Numeric(10, 2), nullable=False, default=0)

    prestamo = relationship("Prestamo", back_populates="pagos")
