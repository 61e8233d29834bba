# prestamos/routers/users_router.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prestamos.core.security import ADMIN_ONLY, get_current_user, hash_password
from prestamos.models.cobrador_model import Cobrador
from prestamos.models.user_model import User
from prestamos.schemas.auth_schemas import UserOut, UserUpdate
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/users", response_model=List[UserOut], dependencies=ADMIN_ONLY)
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id.asc()).all()


@router.put("/users/{user_id}", response_model=UserOut, dependencies=ADMIN_ONLY)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(404, "Usuario no encontrado")

    data = payload.model_dump(exclude_unset=True)
    password = data.pop("password", None)

    for k, v in data.items():
        if v is not None:
            setattr(user, k, v)

    if password:
        user.password = hash_password(password)

    db.commit()
    db.refresh(user)
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=ADMIN_ONLY)
def delete_user(
        user_id: int,
        db: Session = Depends(get_db),
        current: User = Depends(get_current_user),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(404, "Usuario no encontrado")

    if user.id == current.id:
        raise HTTPException(400, "No puede eliminar su propio usuario")

    cobrador = db.query(Cobrador).filter(Cobrador.user_id == user_id).first()
    if cobrador:
        raise HTTPException(400, "El usuario está vinculado a un cobrador")

    db.delete(user)
    db.commit()
    logger.info("User deleted: id=%s", user_id)
    return
