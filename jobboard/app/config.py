import logging
import os
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Tests set DISABLE_DOTENV=1 so a developer's local .env can't leak into the run.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_DATA_DIR = (PROJECT_ROOT / "data").as_posix()

# Well-known development credential. Never accepted when APP_ENV=production.
DEV_ADMIN_PASSWORD = "admin123"

_default_origins = [
    "http://localhost:3000",
    "http://localhost:5000",
    "http://127.0.0.1:5500",
]


def _env_bool(name: str, default: str = "0") -> bool:
    v = (os.getenv(name, default) or default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


class Settings(BaseModel):
    environment: str = "development"
    data_dir: str = DEFAULT_DATA_DIR
    secret_key: str
    admin_username: str = "admin"
    admin_email: str = "admin@example.com"
    admin_name: str = "Admin"
    admin_password: str
    admin_token_expire_minutes: int = Field(default=60 * 24, ge=1)  # 1 day
    user_token_expire_minutes: int = Field(default=60 * 24 * 7, ge=1)  # 7 days
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    allowed_origins: list[str] = Field(default_factory=lambda: list(_default_origins))
    seed_sample_jobs: bool = False
    frontend_dir: str | None = None
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        In production both SECRET_KEY and ADMIN_PASSWORD must be set. In development a
        random per-process secret is generated (sessions do not survive a restart) and
        the bootstrap admin falls back to DEV_ADMIN_PASSWORD.
        """
        environment = (os.getenv("APP_ENV") or "development").strip().lower()
        production = environment == "production"

        secret_key = (os.getenv("SECRET_KEY") or "").strip()
        if not secret_key:
            if production:
                raise RuntimeError("SECRET_KEY must be set when APP_ENV=production")
            logger.warning("SECRET_KEY is not set; using a random key for this process only")
            secret_key = secrets.token_urlsafe(32)

        admin_password = os.getenv("ADMIN_PASSWORD") or ""
        if not admin_password:
            if production:
                raise RuntimeError("ADMIN_PASSWORD must be set when APP_ENV=production")
            admin_password = DEV_ADMIN_PASSWORD
        if len(admin_password.encode("utf-8")) > 72:
            raise RuntimeError("ADMIN_PASSWORD must be 72 bytes or less")

        raw_origins = os.getenv("ALLOWED_ORIGINS", "")
        origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

        return cls(
            environment=environment,
            data_dir=(os.getenv("DATA_DIR") or "").strip() or DEFAULT_DATA_DIR,
            secret_key=secret_key,
            admin_username=(os.getenv("ADMIN_USERNAME") or "admin").strip(),
            admin_email=(os.getenv("ADMIN_EMAIL") or "admin@example.com").strip().lower(),
            admin_name=(os.getenv("ADMIN_NAME") or "Admin").strip(),
            admin_password=admin_password,
            admin_token_expire_minutes=_env_int("ADMIN_TOKEN_EXPIRE_MINUTES", 60 * 24),
            user_token_expire_minutes=_env_int("USER_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 12),
            allowed_origins=origins or list(_default_origins),
            seed_sample_jobs=_env_bool("SEED_SAMPLE_JOBS", "0"),
            frontend_dir=(os.getenv("FRONTEND_DIR") or "").strip() or None,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        )
