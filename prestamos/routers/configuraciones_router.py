from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED, require_admin
from prestamos.models.configuracion_model import Configuracion
from prestamos.schemas.configuracion_schemas import (
    ConfiguracionCreate,
    ConfiguracionOut,
    ConfiguracionUpdate,
)
from prestamos.utils.database import get_db

router = APIRouter(prefix="/api/configuraciones", tags=["Configuraciones"], dependencies=AUTHENTICATED)


@router.get("", response_model=list[ConfiguracionOut])
def list_configuraciones(categoria: Optional[str] = Query(None), db: Session = Depends(get_db)):
    q = db.query(Configuracion)
    if categoria:
        q = q.filter(Configuracion.categoria == categoria)
    return q.order_by(Configuracion.categoria.asc(), Configuracion.clave.asc()).all()


@router.get("/{clave}", response_model=ConfiguracionOut)
def get_configuracion(clave: str, db: Session = Depends(get_db)):
    obj = db.query(Configuracion).filter(Configuracion.clave == clave).first()
    if not obj:
        raise HTTPException(404, "Configuración no encontrada")
    return obj


@router.post(
    "",
    response_model=ConfiguracionOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_configuracion(payload: ConfiguracionCreate, db: Session = Depends(get_db)):
    clave = payload.clave.strip()

    # 1) Prevent duplicate key
    existing = db.query(Configuracion).filter(Configuracion.clave == clave).first()
    if existing:
        raise HTTPException(status_code=409, detail="Ya existe una configuración con esa clave")

    # 2) Create new entry
    obj = Configuracion(
        clave=clave,
        valor=payload.valor.strip(),
        categoria=payload.categoria.strip(),
        descripcion=(payload.descripcion or "").strip(),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put("/{configuracion_id}", response_model=ConfiguracionOut, dependencies=[Depends(require_admin)])
def update_configuracion(
        configuracion_id: int,
        payload: ConfiguracionUpdate,
        db: Session = Depends(get_db),
):
    obj = db.query(Configuracion).filter(Configuracion.id == configuracion_id).first()
    if not obj:
        raise HTTPException(404, "Configuración no encontrada")

    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(obj, k, v.strip())

    db.commit()
    db.refresh(obj)
    return obj
