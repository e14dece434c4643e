# FILE: signup_api/database.py
# Scop:
#   - Database = manager de resurse pe proces: engine SQLAlchemy + pool limitat + SessionLocal.
#   - Se construiește O SINGURĂ DATĂ la startup (main.create_app) și se ține în app.state.
#   - session(): achiziție cu scope => conexiunea revine în pool pe orice ramură (ok / 4xx / eroare).
#   - dispose(): golește și închide pool-ul la shutdown (SIGINT/SIGTERM via lifespan).
#
# Debug:
#   - 503 "connection timeout" => pool saturat: toate cele DB_POOL_MAX conexiuni sunt ocupate
#     mai mult de DB_CONNECT_TIMEOUT_MS. Verifică request-uri lente / sesiuni neînchise.
#   - "Eroare fatală în pool" în journal => DB a căzut sub conexiuni deja stabilite;
#     repornește procesul (systemctl restart ...) după ce DB e din nou sus.

import logging
import math
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import ExceptionContext, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import Settings
from .services.db_errors import classify_db_error

logger = logging.getLogger(__name__)

Base = declarative_base()

FatalHandler = Callable[[BaseException], None]


def _log_fatal(exc: BaseException) -> None:
    logger.critical(
        "Eroare fatală în pool-ul de conexiuni: %s. Procesul trebuie repornit (nu se încearcă recovery).",
        exc,
    )


def _engine_kwargs(url: str, *, pool_max: int, idle_timeout_ms: int, connect_timeout_ms: int) -> dict:
    u = make_url(url)
    kwargs: dict = {"pool_pre_ping": True}

    if u.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        # :memory: folosește SingletonThreadPool (fără pool_size/pool_timeout)
        if not u.database or u.database == ":memory:":
            return kwargs
    else:
        kwargs["connect_args"] = {"connect_timeout": max(1, math.ceil(connect_timeout_ms / 1000))}

    kwargs.update(
        pool_size=pool_max,
        max_overflow=0,
        pool_timeout=connect_timeout_ms / 1000,
        pool_recycle=max(1, idle_timeout_ms // 1000),
    )
    return kwargs


class Database:
    def __init__(
        self,
        url: str,
        *,
        pool_max: int = 20,
        idle_timeout_ms: int = 30000,
        connect_timeout_ms: int = 2000,
        on_fatal: Optional[FatalHandler] = None,
    ):
        self.url = url
        self.engine = create_engine(
            url,
            **_engine_kwargs(
                url,
                pool_max=pool_max,
                idle_timeout_ms=idle_timeout_ms,
                connect_timeout_ms=connect_timeout_ms,
            ),
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self._on_fatal = on_fatal or _log_fatal

        event.listen(self.engine, "handle_error", self._handle_error)

    @classmethod
    def from_settings(cls, settings: Settings, *, on_fatal: Optional[FatalHandler] = None) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_max=settings.db_pool_max,
            idle_timeout_ms=settings.db_idle_timeout_ms,
            connect_timeout_ms=settings.db_connect_timeout_ms,
            on_fatal=on_fatal,
        )

    def _handle_error(self, context: ExceptionContext) -> None:
        # doar conexiuni deja stabilite care mor (nu connect refuzat / pre-ping)
        if context.is_disconnect and context.connection is not None and not context.is_pre_ping:
            self._on_fatal(context.original_exception)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            try:
                db.connection()  # checkout eager: timeout-ul de pool se vede aici
            except SQLAlchemyError as exc:
                raise classify_db_error(exc) from exc
            yield db
        finally:
            db.close()

    def ping(self) -> None:
        with self.session() as db:
            db.execute(text("SELECT 1"))

    def has_table(self, name: str) -> bool:
        return inspect(self.engine).has_table(name)

    def create_all(self) -> None:
        from . import models  # noqa: F401  (înregistrează modelele pe Base)

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Pool DB închis")
