import logging

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from prestamos.core import config
from prestamos.models.user_model import User
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

ROLES = ("ADMIN", "USUARIO", "COBRADOR")
SESSION_USER_KEY = "user_id"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        logger.warning("Stored password has an invalid hash format")
        return False


def login_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, db: Session = Depends(get_db)):
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.activo:
        request.session.clear()
        return None
    return user


def get_current_user(user: User = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No autorizado")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.rol != "ADMIN":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Se requiere rol ADMIN")
    return user


def require_debug_routes():
    if not config.ENABLE_DEBUG_ROUTES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return True


# router-level guards
AUTHENTICATED = [Depends(get_current_user)]
ADMIN_ONLY = [Depends(require_admin)]
