from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prestamos.core.security import AUTHENTICATED, get_current_user
from prestamos.models.nota_model import NotaPrestamo
from prestamos.models.prestamo_model import Prestamo
from prestamos.models.user_model import User
from prestamos.schemas.nota_schemas import NotaCreate, NotaOut, NotaUpdate
from prestamos.utils.database import get_db

router = APIRouter(prefix="/api", tags=["Notas"], dependencies=AUTHENTICATED)


def validate_prestamo(db: Session, prestamo_id: int):
    prestamo = db.query(Prestamo.id).filter(Prestamo.id == prestamo_id).first()
    if not prestamo:
        raise HTTPException(status_code=404, detail="Préstamo no encontrado")


def get_nota_or_404(db: Session, nota_id: int) -> NotaPrestamo:
    nota = db.query(NotaPrestamo).filter(NotaPrestamo.id == nota_id).first()
    if not nota:
        raise HTTPException(status_code=404, detail="Nota no encontrada")
    return nota


@router.get("/prestamos/{prestamo_id}/notas", response_model=list[NotaOut])
def list_notas(prestamo_id: int, db: Session = Depends(get_db)):
    validate_prestamo(db, prestamo_id)
    # important notes first, newest first inside each group
    return (
        db.query(NotaPrestamo)
        .filter(NotaPrestamo.prestamo_id == prestamo_id)
        .order_by(NotaPrestamo.importante.desc(), NotaPrestamo.id.desc())
        .all()
    )


@router.post(
    "/prestamos/{prestamo_id}/notas",
    response_model=NotaOut,
    status_code=status.HTTP_201_CREATED,
)
def create_nota(
        prestamo_id: int,
        payload: NotaCreate,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
):
    validate_prestamo(db, prestamo_id)

    nota = NotaPrestamo(prestamo_id=prestamo_id, creado_por=user.id, **payload.model_dump())
    db.add(nota)
    db.commit()
    db.refresh(nota)
    return nota


@router.put("/notas/{nota_id}", response_model=NotaOut)
def update_nota(nota_id: int, payload: NotaUpdate, db: Session = Depends(get_db)):
    nota = get_nota_or_404(db, nota_id)

    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(nota, k, v)

    db.commit()
    db.refresh(nota)
    return nota


@router.delete("/notas/{nota_id}")
def delete_nota(nota_id: int, db: Session = Depends(get_db)):
    nota = get_nota_or_404(db, nota_id)
    db.delete(nota)
    db.commit()
    return {"message": "Nota eliminada correctamente"}
