# DEV ONLY – enabled with ENABLE_DEBUG_ROUTES=true
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from prestamos.core import config
from prestamos.core.security import hash_password, require_debug_routes
from prestamos.initial_data import ensure_admin
from prestamos.models.user_model import User
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/debug",
    tags=["Debug"],
    dependencies=[Depends(require_debug_routes)],
)


@router.get("/ensure-admin")
def debug_ensure_admin(db: Session = Depends(get_db)):
    admin = ensure_admin(db, reset_password=True)
    db.commit()
    return {
        "success": True,
        "message": "Usuario administrador verificado y actualizado",
        "userId": admin.id,
    }


@router.get("/reset-password/{username}")
def debug_reset_password(username: str, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise HTTPException(404, "Usuario no encontrado")

    user.password = hash_password(config.RESET_PASSWORD_DEFAULT)
    db.commit()
    logger.warning("Password reset through debug route for user id=%s", user.id)

    return {
        "success": True,
        "message": f"Contraseña de {username} restablecida",
        "username": user.username,
        "userId": user.id,
    }
