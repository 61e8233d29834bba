# prestamos/models/prestamo_model.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Numeric,
    Boolean,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship
from prestamos.utils.database import Base


class Prestamo(Base):
    __tablename__ = "prestamos"

    __table_args__ = (
        Index("ix_prestamos_estado", "estado"),
        Index("ix_prestamos_cliente_estado", "cliente_id", "estado"),
        Index("ix_prestamos_proxima_fecha", "proxima_fecha_pago"),
    )

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id", ondelete="RESTRICT"), nullable=False, index=True)

    monto_prestado = Column(Numeric(10, 2), nullable=False)
    tasa_interes = Column(Numeric(5, 2), nullable=False)
    # stored only, no penalty is computed from it
    tasa_mora = Column(Numeric(5, 2), nullable=False, default=5)

    fecha_prestamo = Column(Date, nullable=False)
    # SEMANAL / QUINCENAL / MENSUAL
    frecuencia_pago = Column(String(20), nullable=False, default="SEMANAL")

    # ACTIVO / PAGADO / ATRASADO
    estado = Column(String(20), nullable=False, default="ACTIVO")

    monto_total_pagar = Column(Numeric(10, 2), nullable=False)
    numero_semanas = Column(Integer, nullable=False, default=12)
    pago_semanal = Column(Numeric(10, 2), nullable=False, default=0)
    semanas_pagadas = Column(Integer, nullable=False, default=0)

    proxima_fecha_pago = Column(Date, nullable=False)
    dias_atraso = Column(Integer, nullable=False, default=0)
    monto_mora_acumulada = Column(Numeric(10, 2), nullable=False, default=0)

    # custom first due date; overrides fecha_prestamo + 1 period
    fecha_inicial_personalizada = Column(Date, nullable=True)
    # 0 = domingo ... 6 = sábado
    dia_pago = Column(Integer, nullable=True)
    cronograma_eliminado = Column(Boolean, nullable=False, default=False)

    cliente = relationship("Cliente", back_populates="prestamos")
    pagos = relationship(
        "Pago",
        back_populates="prestamo",
        cascade="all, delete-orphan",
        order_by="Pago.id",
    )
    notas = relationship(
        "NotaPrestamo",
        back_populates="prestamo",
        cascade="all, delete-orphan",
    )
