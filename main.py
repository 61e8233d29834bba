import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

import prestamos.models  # ensure models are registered
from prestamos.core import config
from prestamos.core.logging import setup_logging
from prestamos.utils.database import engine, Base
from prestamos.initial_data import init_seed

from prestamos.routers import (
    auth_router,
    users_router,
    debug_router,
    clientes_router,
    cobradores_router,
    prestamos_router,
    pagos_router,
    notas_router,
    calculadora_router,
    caja_router,
    cobranza_router,
    reports_router,
    configuraciones_router,
    sistema_router,
)

logger = logging.getLogger("prestamos")

app = FastAPI(title="Sistema de Préstamos API", version="1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# cookie session (signed with itsdangerous)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    session_cookie=config.SESSION_COOKIE,
    max_age=config.SESSION_MAX_AGE,
    same_site="lax",
    https_only=False,
)

# Routers
app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(debug_router.router)
app.include_router(clientes_router.router)
app.include_router(cobradores_router.router)
app.include_router(prestamos_router.router)
app.include_router(pagos_router.router)
app.include_router(notas_router.router)
app.include_router(calculadora_router.router)
app.include_router(caja_router.router)
app.include_router(cobranza_router.router)
app.include_router(reports_router.router)
app.include_router(configuraciones_router.router)
app.include_router(sistema_router.router)


@app.on_event("startup")
def on_startup():
    setup_logging(config.LOG_LEVEL)

    # DEV ONLY – no migrations yet
    Base.metadata.create_all(bind=engine)

    logger.info("Running initial database seeding")
    init_seed()
    logger.info("Seeding complete")


@app.get("/")
def root():
    return {"message": "Sistema de Préstamos API is running"}
