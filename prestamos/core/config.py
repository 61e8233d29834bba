import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


# ---------------------
# Session / auth
# ---------------------
SESSION_SECRET = os.getenv("SESSION_SECRET", "sistema-de-prestamos-secret")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))  # 7 days
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "prestamos_session")

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin@sistema.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
RESET_PASSWORD_DEFAULT = os.getenv("RESET_PASSWORD_DEFAULT", "123456")

# DEV ONLY: password reset / admin bootstrap endpoints
ENABLE_DEBUG_ROUTES = _as_bool(os.getenv("ENABLE_DEBUG_ROUTES", "false"))

# ---------------------
# HTTP
# ---------------------
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080",
    ).split(",")
    if o.strip()
]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
