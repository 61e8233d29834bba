from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from prestamos.utils.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash

    nombre = Column(String(150), nullable=False)
    email = Column(String(150), nullable=True)

    # ADMIN / USUARIO / COBRADOR
    rol = Column(String(20), nullable=False, default="USUARIO")
    activo = Column(Boolean, nullable=False, default=True)

    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, rol={self.rol})>"
