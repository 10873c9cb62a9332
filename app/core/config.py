import os


# =========================
# DATABASE
# =========================

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./riding_school.db")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"


# =========================
# AUTH
# =========================

SECRET_KEY = os.getenv("AUTH_SECRET", "dev-secret-change-me")
ALGORITHM = "HS256"
SESSION_EXPIRE_DAYS = int(os.getenv("SESSION_EXPIRE_DAYS", "7"))
VERIFICATION_EXPIRE_HOURS = int(os.getenv("VERIFICATION_EXPIRE_HOURS", "24"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session_token")


# =========================
# APP
# =========================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
