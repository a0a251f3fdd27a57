"""
Configuration helpers for the storage backend.

Routers/services read the typed Settings object instead of fetching
os.environ directly, so tests can swap the environment and clear the cache.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Tuple
import os

ROOT_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    storage_dir: Path
    dist_dir: Path
    max_body_bytes: int
    cors_origins: Tuple[str, ...]
    log_level: str
    email_user: str
    email_app_password: str
    email_from_name: str
    smtp_host: str
    smtp_port: int

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_app_password)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _path(value: str | None, default: Path) -> Path:
        if not value:
            return default
        return Path(value).expanduser().resolve()

    def _origins(value: str | None) -> Tuple[str, ...]:
        items = [x.strip() for x in (value or "*").split(",")]
        return tuple(x for x in items if x) or ("*",)

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        storage_dir=_path(os.getenv("STORAGE_DIR"), ROOT_DIR / "storage"),
        dist_dir=_path(os.getenv("DIST_DIR"), ROOT_DIR / "dist"),
        max_body_bytes=_int(os.getenv("MAX_BODY_BYTES", "209715200"), 200 * 1024 * 1024),
        cors_origins=_origins(os.getenv("CORS_ORIGINS")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        email_user=os.getenv("EMAIL_USER", ""),
        email_app_password=os.getenv("EMAIL_APP_PASSWORD", ""),
        email_from_name=os.getenv("EMAIL_FROM_NAME", "TradePilot AI"),
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
    )
