# FILE: signup_api/config.py
# Scop:
#   - Setări centralizate (DB, pool, server, CORS, debug), citite din .env / environment.
#   - URL-ul SQLAlchemy se construiește din DATABASE_URL sau din părțile DB_*.
#
# Debug avansat:
#   - Dacă pornește pe DB greșită: verifică DATABASE_URL (are prioritate față de DB_HOST/DB_NAME).
#   - Dacă primești des 503 "connection timeout": crește DB_POOL_MAX sau DB_CONNECT_TIMEOUT_MS.

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()  # încarcă .env din root-ul proiectului


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return int(default)


@dataclass
class Settings:
    # DB (DATABASE_URL are prioritate)
    database_url: str = os.getenv("DATABASE_URL", "")

    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: int = _get_int("DB_PORT", 5432)
    db_name: str = os.getenv("DB_NAME", "signups_db")
    db_user: str = os.getenv("DB_USER", "postgres")
    db_password: str = os.getenv("DB_PASSWORD", "")

    # Pool
    db_pool_max: int = _get_int("DB_POOL_MAX", 20)
    db_idle_timeout_ms: int = _get_int("DB_IDLE_TIMEOUT_MS", 30000)
    db_connect_timeout_ms: int = _get_int("DB_CONNECT_TIMEOUT_MS", 2000)

    # Eroare fatală în pool => SIGTERM, supervisor-ul (systemd) repornește procesul
    db_exit_on_pool_error: bool = _get_bool("DB_EXIT_ON_POOL_ERROR", "false")

    # DEV bootstrap (în prod: false + migrații)
    db_auto_create: bool = _get_bool("DB_AUTO_CREATE", "false")

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _get_int("PORT", 3000)

    # CORS (listă separată prin virgulă)
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Debug (development mode: detalii în răspunsurile 500)
    debug: bool = _get_bool("DEBUG", "false")

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
