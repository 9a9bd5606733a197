import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

TRUTHY = ("1", "true", "yes", "on")


def _int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _seconds(name: str, default_ms: int) -> float:
    return _int(name, default_ms) / 1000.0


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "devops_app"
    db_user: str = "postgres"
    db_password: str = "postgres"
    pool_max: int = 20
    idle_timeout: float = 30.0
    connect_timeout: float = 2.0
    drain_timeout: float = 10.0
    environment: str = "development"
    hostname: str = "unknown"
    run_migrations: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        env_file = env_file or Path.cwd() / ".env"
        if env_file.exists():
            load_dotenv(env_file)
        pool_max = _int("DB_POOL_MAX", 20)
        if pool_max < 1:
            raise ConfigError(f"DB_POOL_MAX must be positive, got {pool_max}")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int("PORT", 3000),
            database_url=os.getenv("DATABASE_URL") or None,
            db_host=os.getenv("DB_HOST", "localhost"),
            db_port=_int("DB_PORT", 5432),
            db_name=os.getenv("DB_NAME", "devops_app"),
            db_user=os.getenv("DB_USER", "postgres"),
            db_password=os.getenv("DB_PASSWORD", "postgres"),
            pool_max=pool_max,
            idle_timeout=_seconds("DB_IDLE_TIMEOUT_MS", 30000),
            connect_timeout=_seconds("DB_CONNECTION_TIMEOUT_MS", 2000),
            drain_timeout=_seconds("DB_DRAIN_TIMEOUT_MS", 10000),
            environment=os.getenv("ENVIRONMENT", "development"),
            hostname=os.getenv("HOSTNAME", "unknown"),
            run_migrations=os.getenv("RUN_MIGRATIONS", "1").lower() in TRUTHY,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def connect_kwargs(self) -> dict:
        if self.database_url:
            return {"dsn": self.database_url}
        return {
            "host": self.db_host,
            "port": self.db_port,
            "database": self.db_name,
            "user": self.db_user,
            "password": self.db_password,
        }
