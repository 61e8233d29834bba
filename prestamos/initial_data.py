import logging

from sqlalchemy.orm import Session

from prestamos.core import config
from prestamos.core.security import hash_password
from prestamos.models.configuracion_model import Configuracion
from prestamos.models.user_model import User
from prestamos.utils.database import SessionLocal

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURACIONES = [
    ("empresa_nombre", "Mi Empresa de Préstamos", "empresa", "Nombre de la empresa"),
    ("empresa_direccion", "Calle Principal #123", "empresa", "Dirección de la empresa"),
    ("empresa_telefono", "123-456-7890", "empresa", "Teléfono de contacto"),
    ("prestamo_tasa_default", "10", "prestamos", "Tasa de interés predeterminada para préstamos"),
    ("prestamo_plazo_default", "12", "prestamos", "Plazo predeterminado para préstamos (en semanas)"),
    ("documento_siguiente_id", "1000", "sistema", "Siguiente ID para documentos de clientes"),
]


def ensure_admin(db: Session, reset_password: bool = False) -> User:
    """Create the bootstrap admin, or optionally reset its password."""
    admin = db.query(User).filter(User.username == config.ADMIN_USERNAME).first()

    if not admin:
        admin = User(
            username=config.ADMIN_USERNAME,
            password=hash_password(config.ADMIN_PASSWORD),
            nombre="Administrador",
            email=config.ADMIN_USERNAME,
            rol="ADMIN",
            activo=True,
        )
        db.add(admin)
        db.flush()
        logger.info("Admin user created: %s", admin.id)
    elif reset_password:
        admin.password = hash_password(config.ADMIN_PASSWORD)
        admin.activo = True
        logger.info("Admin password reset for user: %s", admin.id)

    return admin


def ensure_default_configuraciones(db: Session) -> int:
    existing = {c for (c,) in db.query(Configuracion.clave).all()}
    created = 0
    for clave, valor, categoria, descripcion in DEFAULT_CONFIGURACIONES:
        if clave in existing:
            continue
        db.add(Configuracion(clave=clave, valor=valor, categoria=categoria, descripcion=descripcion))
        created += 1
    return created


def init_seed(db: Session = None) -> None:
    own_session = db is None
    if own_session:
        db = SessionLocal()

    try:
        ensure_admin(db)
        created = ensure_default_configuraciones(db)
        db.commit()
        if created:
            logger.info("Default configuration initialised (%d keys)", created)
    except Exception:
        db.rollback()
        raise
    finally:
        if own_session:
            db.close()
