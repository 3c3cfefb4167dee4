# contactbook/config.py
import os
from pathlib import Path
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

DEFAULT_ADMIN_PASSWORD = "admin123"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Contact Book API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    # Persistence: embedded SQLite file by default
    database_url: str = os.getenv("DATABASE_URL", "sqlite://data/contacts.db")

    # Token signing
    # ⚠️ The fallback secret is public; set JWT_SECRET in every real deployment
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24h

    # Icon uploads
    upload_dir: Path = Path(os.getenv("UPLOAD_DIR", "uploads"))
    max_icon_bytes: int = int(os.getenv("MAX_ICON_BYTES", "200000"))  # ~200KB

    # Default admin seeded on first run (rotate the password after deployment)
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)

    # When true, contact updates require owner-or-admin like deletes do
    strict_update_ownership: bool = _env_bool("STRICT_UPDATE_OWNERSHIP")

    # Regional mobile-number pattern (India: optional +91/91/0 prefix, 10 digits starting 6-9)
    phone_pattern: str = os.getenv("PHONE_PATTERN", r"^(?:\+91[\s-]?|91|0)?[6-9]\d{9}$")


settings = Settings()  # Instantiate configuration
