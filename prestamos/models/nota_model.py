from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from prestamos.utils.database import Base


class NotaPrestamo(Base):
    __tablename__ = "notas_prestamo"

    id = Column(Integer, primary_key=True, index=True)
    prestamo_id = Column(Integer, ForeignKey("prestamos.id", ondelete="CASCADE"), nullable=False, index=True)

    titulo = Column(String(200), nullable=False)
    contenido = Column(Text, nullable=False)
    # GENERAL / PAGO / INCIDENCIA / RECORDATORIO
    tipo = Column(String(20), nullable=False, default="GENERAL")
    importante = Column(Boolean, nullable=False, default=False)

    fecha_creacion = Column(DateTime, server_default=func.now(), nullable=False)
    creado_por = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    prestamo = relationship("Prestamo", back_populates="notas")
