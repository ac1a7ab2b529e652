import os
from dotenv import load_dotenv

load_dotenv()

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "168"))  # 7 days

# --- Database ---
def normalize_database_url(url: str) -> str:
    """Point bare postgres URLs at the psycopg (v3) driver installed by the postgres extra."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


# Default to local SQLite, but prefer environment variable
DATABASE_URL = normalize_database_url(os.getenv("DATABASE_URL", "sqlite:///./data/uninet.db"))

# --- Registration ---
ALLOWED_EMAIL_SUFFIXES = [
    s.strip().lower() for s in os.getenv("ALLOWED_EMAIL_SUFFIXES", ".edu.pk").split(",") if s.strip()
]
MIN_PASSWORD_LENGTH = 8

# --- Feed ---
DEFAULT_AVATAR = os.getenv("DEFAULT_AVATAR", "/default-avatar.png")
PLACEHOLDER_IMAGE_HOST = os.getenv("PLACEHOLDER_IMAGE_HOST", "https://placeholder.com")
MAX_SUGGESTION_LIMIT = int(os.getenv("MAX_SUGGESTION_LIMIT", "50"))

# --- HTTP ---
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
