import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from prestamos.core.security import (
    get_current_user,
    get_optional_user,
    hash_password,
    login_session,
    logout_session,
    verify_password,
)
from prestamos.models.user_model import User
from prestamos.schemas.auth_schemas import UserRegister, UserLogin, UserOut, CambiarCredenciales
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
        payload: UserRegister,
        request: Request,
        db: Session = Depends(get_db),
        current: User = Depends(get_optional_user),
):
    exists = db.query(User).filter(User.username == payload.username).first()
    if exists:
        raise HTTPException(400, "El nombre de usuario ya existe")

    # only an admin may create another admin (first user of an empty DB excepted)
    if payload.rol == "ADMIN":
        has_users = db.query(User.id).first() is not None
        if has_users and (current is None or current.rol != "ADMIN"):
            raise HTTPException(403, "Solo un administrador puede crear administradores")

    user = User(
        username=payload.username,
        password=hash_password(payload.password),
        nombre=payload.nombre,
        rol=payload.rol,
        email=payload.email or payload.username,
        activo=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered: id=%s username=%s rol=%s", user.id, user.username, user.rol)

    # an admin creating accounts keeps its own session
    if current is None:
        login_session(request, user)
    return user


@router.post("/login", response_model=UserOut)
def login(payload: UserLogin, request: Request, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == payload.username).first()

    if not user or not verify_password(payload.password, user.password):
        logger.warning("Failed login for username=%s", payload.username)
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Credenciales inválidas")

    if not user.activo:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Usuario inactivo")

    login_session(request, user)
    logger.info("User logged in: id=%s", user.id)
    return user


@router.post("/logout")
def logout(request: Request):
    logout_session(request)
    return {"message": "Sesión cerrada"}


@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.post("/cambiar-credenciales", response_model=UserOut)
def change_credentials(
        payload: CambiarCredenciales,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
):
    if not verify_password(payload.password_actual, user.password):
        raise HTTPException(400, "La contraseña actual es incorrecta")

    if payload.nuevo_username is None and payload.nueva_password is None:
        raise HTTPException(400, "No hay cambios que aplicar")

    if payload.nuevo_username and payload.nuevo_username != user.username:
        dup = (
            db.query(User)
            .filter(User.username == payload.nuevo_username, User.id != user.id)
            .first()
        )
        if dup:
            raise HTTPException(400, "El nombre de usuario ya existe")
        user.username = payload.nuevo_username

    if payload.nueva_password:
        user.password = hash_password(payload.nueva_password)

    db.commit()
    db.refresh(user)
    logger.info("Credentials changed for user id=%s", user.id)
    return user
