import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED
from prestamos.models.cliente_model import Cliente
from prestamos.models.cobrador_model import Cobrador
from prestamos.models.configuracion_model import Configuracion
from prestamos.models.pago_model import Pago
from prestamos.models.prestamo_model import Prestamo
from prestamos.schemas.cliente_schemas import ClienteCreate, ClienteUpdate, ClienteOut, TotalPagadoOut
from prestamos.utils.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clientes", tags=["Clientes"], dependencies=AUTHENTICATED)

DOCUMENTO_KEY = "documento_siguiente_id"


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def next_documento_identidad(db: Session) -> str:
    """Returns CL-<n> and advances the stored counter."""
    cfg = db.query(Configuracion).filter(Configuracion.clave == DOCUMENTO_KEY).first()
    if not cfg:
        cfg = Configuracion(
            clave=DOCUMENTO_KEY,
            valor="1000",
            categoria="sistema",
            descripcion="Siguiente ID para documentos de clientes",
        )
        db.add(cfg)

    current = int(cfg.valor)
    candidate = f"CL-{current}"
    # skip numbers already taken by manually entered documents
    while db.query(Cliente.id).filter(Cliente.documento_identidad == candidate).first():
        current += 1
        candidate = f"CL-{current}"

    cfg.valor = str(current + 1)
    return candidate


def validate_cobrador(db: Session, cobrador_id: Optional[int]):
    if cobrador_id is None:
        return
    exists = db.query(Cobrador.id).filter(Cobrador.id == cobrador_id).first()
    if not exists:
        raise HTTPException(status_code=400, detail="cobrador_id no válido")


def get_cliente_or_404(db: Session, cliente_id: int) -> Cliente:
    cliente = db.query(Cliente).filter(Cliente.id == cliente_id).first()
    if not cliente:
        raise HTTPException(404, "Cliente no encontrado")
    return cliente


def _commit_or_conflict(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ya existe un cliente con ese documento de identidad",
        )


# READ ALL
@router.get("", response_model=list[ClienteOut])
def list_clientes(
        cobrador_id: Optional[int] = Query(None),
        search: Optional[str] = Query(None),
        db: Session = Depends(get_db),
):
    q = db.query(Cliente)

    if cobrador_id is not None:
        q = q.filter(Cliente.cobrador_id == cobrador_id)

    if search:
        like = f"%{search.strip()}%"
        q = q.filter(
            Cliente.nombre.ilike(like)
            | Cliente.documento_identidad.ilike(like)
            | Cliente.telefono.ilike(like)
        )

    return q.order_by(Cliente.id.asc()).all()


# CREATE
@router.post("", response_model=ClienteOut, status_code=status.HTTP_201_CREATED)
def create_cliente(payload: ClienteCreate, db: Session = Depends(get_db)):
    validate_cobrador(db, payload.cobrador_id)

    data = payload.model_dump()
    if not data.get("documento_identidad"):
        data["documento_identidad"] = next_documento_identidad(db)
    else:
        dup = (
            db.query(Cliente.id)
            .filter(Cliente.documento_identidad == data["documento_identidad"])
            .first()
        )
        if dup:
            raise HTTPException(409, "Ya existe un cliente con ese documento de identidad")

    cliente = Cliente(**data)
    db.add(cliente)
    _commit_or_conflict(db)
    db.refresh(cliente)
    logger.info("Cliente created: id=%s documento=%s", cliente.id, cliente.documento_identidad)
    return cliente


# READ ONE
@router.get("/{cliente_id}", response_model=ClienteOut)
def get_cliente(cliente_id: int, db: Session = Depends(get_db)):
    return get_cliente_or_404(db, cliente_id)


# UPDATE
@router.put("/{cliente_id}", response_model=ClienteOut)
def update_cliente(cliente_id: int, payload: ClienteUpdate, db: Session = Depends(get_db)):
    cliente = get_cliente_or_404(db, cliente_id)

    data = payload.model_dump(exclude_unset=True)

    if "cobrador_id" in data:
        validate_cobrador(db, data["cobrador_id"])

    if data.get("documento_identidad"):
        dup = (
            db.query(Cliente.id)
            .filter(
                Cliente.documento_identidad == data["documento_identidad"],
                Cliente.id != cliente_id,
            )
            .first()
        )
        if dup:
            raise HTTPException(409, "Ya existe un cliente con ese documento de identidad")

    for k, v in data.items():
        if k in ("nombre", "telefono", "direccion", "documento_identidad") and v is None:
            continue
        setattr(cliente, k, v)

    _commit_or_conflict(db)
    db.refresh(cliente)
    return cliente


# DELETE
@router.delete("/{cliente_id}")
def delete_cliente(cliente_id: int, db: Session = Depends(get_db)):
    cliente = get_cliente_or_404(db, cliente_id)

    has_loans = db.query(Prestamo.id).filter(Prestamo.cliente_id == cliente_id).first()
    if has_loans:
        logger.warning("Refusing to delete cliente %s with loans", cliente_id)
        raise HTTPException(
            400, "No se puede eliminar el cliente porque tiene préstamos asociados"
        )

    db.delete(cliente)
    db.commit()
    logger.info("Cliente deleted: id=%s", cliente_id)
    return {"message": "Cliente eliminado correctamente"}


@router.get("/{cliente_id}/total-pagado", response_model=TotalPagadoOut)
def total_pagado_cliente(cliente_id: int, db: Session = Depends(get_db)):
    get_cliente_or_404(db, cliente_id)

    total = (
        db.query(func.coalesce(func.sum(Pago.monto_pagado), 0))
        .join(Prestamo, Prestamo.id == Pago.prestamo_id)
        .filter(Prestamo.cliente_id == cliente_id)
        .scalar()
    )
    return TotalPagadoOut(totalPagado=float(total or 0))
