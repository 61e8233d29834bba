# prestamos/routers/cobradores_router.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED
from prestamos.models.cliente_model import Cliente
from prestamos.models.cobrador_model import Cobrador
from prestamos.models.user_model import User
from prestamos.schemas.auth_schemas import UserOut
from prestamos.schemas.cliente_schemas import ClienteOut
from prestamos.schemas.cobrador_schemas import (
    AsignarClientesPayload,
    CobradorCreate,
    CobradorOut,
    CobradorUpdate,
)
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Cobradores"], dependencies=AUTHENTICATED)


def get_cobrador_or_404(db: Session, cobrador_id: int) -> Cobrador:
    cobrador = db.query(Cobrador).filter(Cobrador.id == cobrador_id).first()
    if not cobrador:
        raise HTTPException(status_code=404, detail="Cobrador no encontrado")
    return cobrador


# ===========================
# CREATE COBRADOR
# ===========================

@router.post("/cobradores", response_model=CobradorOut, status_code=status.HTTP_201_CREATED)
def create_cobrador(payload: CobradorCreate, db: Session = Depends(get_db)):
    """
    Register an existing user as a collector.

    Checks:
    - User must exist.
    - User's rol must be COBRADOR.
    - One Cobrador per user.
    """

    user = db.query(User).filter(User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")

    if user.rol != "COBRADOR":
        raise HTTPException(
            status_code=400,
            detail="El usuario debe tener rol COBRADOR",
        )

    existing = db.query(Cobrador).filter(Cobrador.user_id == user.id).first()
    if existing:
        raise HTTPException(
            status_code=400,
            detail="Este usuario ya está registrado como cobrador",
        )

    cobrador = Cobrador(**payload.model_dump())
    db.add(cobrador)
    db.commit()
    db.refresh(cobrador)
    logger.info("Cobrador created: id=%s user_id=%s zona=%s", cobrador.id, user.id, cobrador.zona)
    return cobrador


# ===========================
# LIST / DETAILS
# ===========================

@router.get("/cobradores", response_model=List[CobradorOut])
def list_cobradores(activo: bool = None, db: Session = Depends(get_db)):
    q = db.query(Cobrador)
    if activo is not None:
        q = q.filter(Cobrador.activo == activo)
    return q.order_by(Cobrador.id.asc()).all()


@router.get("/cobradores/{cobrador_id}", response_model=CobradorOut)
def get_cobrador(cobrador_id: int, db: Session = Depends(get_db)):
    return get_cobrador_or_404(db, cobrador_id)


@router.put("/cobradores/{cobrador_id}", response_model=CobradorOut)
def update_cobrador(cobrador_id: int, payload: CobradorUpdate, db: Session = Depends(get_db)):
    cobrador = get_cobrador_or_404(db, cobrador_id)

    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(cobrador, k, v)

    db.commit()
    db.refresh(cobrador)
    return cobrador


# ===========================
# DELETE COBRADOR
# ===========================

@router.delete("/cobradores/{cobrador_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cobrador(cobrador_id: int, db: Session = Depends(get_db)):
    """Delete a collector; its clients are left unassigned."""
    cobrador = get_cobrador_or_404(db, cobrador_id)

    released = (
        db.query(Cliente)
        .filter(Cliente.cobrador_id == cobrador_id)
        .update({Cliente.cobrador_id: None}, synchronize_session=False)
    )

    db.delete(cobrador)
    db.commit()
    logger.info("Cobrador deleted: id=%s (%d clientes unassigned)", cobrador_id, released)
    return


# ===========================
# CLIENTES OF A COBRADOR
# ===========================

@router.get("/cobradores/{cobrador_id}/clientes", response_model=List[ClienteOut])
def clientes_by_cobrador(cobrador_id: int, db: Session = Depends(get_db)):
    get_cobrador_or_404(db, cobrador_id)
    return (
        db.query(Cliente)
        .filter(Cliente.cobrador_id == cobrador_id)
        .order_by(Cliente.ruta.asc(), Cliente.nombre.asc())
        .all()
    )


@router.post("/cobradores/{cobrador_id}/asignar-clientes", response_model=List[ClienteOut])
def assign_clientes(
        cobrador_id: int,
        payload: AsignarClientesPayload,
        db: Session = Depends(get_db),
):
    cobrador = get_cobrador_or_404(db, cobrador_id)

    clientes = db.query(Cliente).filter(Cliente.id.in_(payload.cliente_ids)).all()
    if not clientes:
        raise HTTPException(
            status_code=404,
            detail="No se encontraron clientes con los ids indicados",
        )

    for c in clientes:
        c.cobrador_id = cobrador.id

    db.commit()

    for c in clientes:
        db.refresh(c)

    return clientes


@router.get("/usuarios-disponibles-para-cobrador", response_model=List[UserOut])
def available_users(db: Session = Depends(get_db)):
    """COBRADOR users not yet linked to a collector record."""
    taken = select(Cobrador.user_id)
    return (
        db.query(User)
        .filter(User.rol == "COBRADOR", User.activo.is_(True), ~User.id.in_(taken))
        .order_by(User.nombre.asc())
        .all()
    )
