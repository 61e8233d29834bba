from sqlalchemy import Column, String, Text, Integer, DateTime
from sqlalchemy.sql import func
from prestamos.utils.database import Base


class Configuracion(Base):
    __tablename__ = "configuraciones"

    id = Column(Integer, primary_key=True, index=True)
    clave = Column(String(100), unique=True, nullable=False, index=True)
    valor = Column(String(200), nullable=False)
    categoria = Column(String(50), nullable=False, default="sistema")
    descripcion = Column(Text)

    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())
