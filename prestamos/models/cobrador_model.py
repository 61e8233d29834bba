from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from prestamos.utils.database import Base


class Cobrador(Base):
    __tablename__ = "cobradores"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False)
    telefono = Column(String(50), nullable=False)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, unique=True)
    zona = Column(String(100), nullable=False)
    activo = Column(Boolean, nullable=False, default=True)

    user = relationship("User")
    clientes = relationship("Cliente", back_populates="cobrador")
