from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv
from pathlib import Path
import os
import sys

# ======================================================
# Load .env correctly in BOTH:
# - normal dev run (uvicorn main:app)
# - frozen onefile EXE (run_server.exe)
# ======================================================

if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    # This file is: <project_root>/prestamos/utils/database.py
    BASE_DIR = Path(__file__).resolve().parents[2]

env_path = BASE_DIR / ".env"
load_dotenv(dotenv_path=env_path)


def build_database_url() -> str:
    """DATABASE_URL wins; otherwise the URL is assembled from DB_* variables."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST", "127.0.0.1")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "prestamos")
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASS", "postgres")

    # 🛡️ Fix the None / empty / "None" port issue permanently
    if not port or str(port).lower() == "none":
        port = "5432"

    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"


DATABASE_URL = build_database_url()

# ---------------------
# SQLAlchemy engine / session / Base
# ---------------------
engine_kwargs = {"echo": False, "future": True}
if DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs.update(
        pool_pre_ping=True,  # drops dead connections automatically
        pool_size=5,
        max_overflow=10,
    )

engine = create_engine(DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
