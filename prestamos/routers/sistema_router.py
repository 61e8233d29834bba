import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import Boolean, Date, DateTime, Numeric, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prestamos.core.security import ADMIN_ONLY
from prestamos.utils.database import Base, get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sistema", tags=["Sistema"], dependencies=ADMIN_ONLY)

EXPORT_VERSION = 1


def _tables():
    # parents before children
    return list(Base.metadata.sorted_tables)


def _coerce(column, value):
    """JSON value back to the python type the column expects."""
    if value is None:
        return None
    if isinstance(column.type, DateTime) and isinstance(value, str):
        return datetime.fromisoformat(value)
    if isinstance(column.type, Date) and isinstance(value, str):
        return date.fromisoformat(value[:10])
    if isinstance(column.type, Numeric) and not isinstance(value, Decimal):
        return Decimal(str(value))
    if isinstance(column.type, Boolean):
        return bool(value)
    return value


def _resync_sequences(db: Session, table_names: List[str]):
    """After inserting explicit ids PostgreSQL serials must be moved past them."""
    if db.get_bind().dialect.name != "postgresql":
        return
    for name in table_names:
        db.execute(
            text(
                f"select setval(pg_get_serial_sequence('{name}', 'id'), "
                f"coalesce(max(id), 1), max(id) is not null) from {name}"
            )
        )


# ------------------------------
# EXPORT
# ------------------------------
@router.get("/exportar")
def exportar(db: Session = Depends(get_db)):
    tablas = {}
    for table in _tables():
        rows = db.execute(table.select().order_by(*table.primary_key.columns)).mappings().all()
        tablas[table.name] = [dict(r) for r in rows]

    ts = datetime.now()
    payload = {
        "version": EXPORT_VERSION,
        "exportado": ts.isoformat(timespec="seconds"),
        "tablas": tablas,
    }
    logger.info("System export: %s", {k: len(v) for k, v in tablas.items()})

    filename = f"prestamos_backup_{ts.strftime('%Y%m%d_%H%M%S')}.json"
    return JSONResponse(
        content=jsonable_encoder(payload),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ------------------------------
# IMPORT
# ------------------------------
@router.post("/importar")
def importar(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """
    Replace every table with the content of an export.

    Runs in a single transaction: any bad row rolls back the whole import.
    """
    tablas = payload.get("tablas")
    if not isinstance(tablas, dict):
        raise HTTPException(400, "Formato de respaldo inválido: falta 'tablas'")

    known = {t.name: t for t in _tables()}
    unknown = sorted(set(tablas) - set(known))
    if unknown:
        raise HTTPException(400, f"Tablas desconocidas en el respaldo: {', '.join(unknown)}")

    counts = {}
    try:
        for table in reversed(_tables()):
            db.execute(table.delete())

        for table in _tables():
            rows = tablas.get(table.name) or []
            if not rows:
                counts[table.name] = 0
                continue
            cols = table.columns
            clean = [
                {c.name: _coerce(c, row[c.name]) for c in cols if c.name in row}
                for row in rows
            ]
            db.execute(table.insert(), clean)
            counts[table.name] = len(clean)

        _resync_sequences(db, [t.name for t in _tables()])
        db.commit()

    except (ValueError, TypeError, KeyError, IntegrityError) as e:
        db.rollback()
        logger.warning("System import rejected: %s", e)
        raise HTTPException(400, f"Respaldo inválido: {e}")
    except Exception:
        db.rollback()
        logger.exception("System import failed")
        raise

    logger.info("System import done: %s", counts)
    return {"message": "Datos importados correctamente", "tablas": counts}
