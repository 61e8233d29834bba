# prestamos/models/cliente_model.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from prestamos.utils.database import Base


class Cliente(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False, index=True)
    telefono = Column(String(50), nullable=False)
    direccion = Column(String(255), nullable=False)
    documento_identidad = Column(String(50), nullable=False, unique=True)
    email = Column(String(150), nullable=True)
    notas = Column(Text, nullable=True)

    fecha_registro = Column(DateTime, server_default=func.now(), nullable=False)

    cobrador_id = Column(Integer, ForeignKey("cobradores.id", ondelete="SET NULL"), nullable=True, index=True)
    # route inside the collector's zone
    ruta = Column(String(100), nullable=True)

    cobrador = relationship("Cobrador", back_populates="clientes")
    prestamos = relationship("Prestamo", back_populates="cliente", passive_deletes=True)
