# FILE: signup_api/services/db_errors.py
# Scop:
#   - Clasificare erori DB: cod eroare driver (SQLSTATE / sqlite) => clasă din taxonomie.
#   - Tabelul DB_ERROR_KINDS e singurul loc unde se decide 409 vs 500 vs 503.
#
# Debug:
#   - Dacă un duplicat iese 500 în loc de 409: loghează db_error_code(exc) și adaugă codul în tabel.
#   - psycopg3 => exc.orig.sqlstate, psycopg2 => exc.orig.pgcode, sqlite3 => exc.orig.sqlite_errorname.

import logging
from typing import Optional, Type

from sqlalchemy import exc as sa_exc

from ..errors import (
    ConflictError,
    DatastoreUnavailableError,
    InternalError,
    SchemaMissingError,
    SignupError,
)

logger = logging.getLogger(__name__)

DB_ERROR_KINDS: dict[str, Type[SignupError]] = {
    # unique_violation
    "23505": ConflictError,
    "SQLITE_CONSTRAINT_UNIQUE": ConflictError,
    # undefined_table
    "42P01": SchemaMissingError,
    "SQLITE_NO_SUCH_TABLE": SchemaMissingError,
    # connection_exception / admin_shutdown / crash_shutdown / cannot_connect_now
    "08000": DatastoreUnavailableError,
    "08001": DatastoreUnavailableError,
    "08003": DatastoreUnavailableError,
    "08004": DatastoreUnavailableError,
    "08006": DatastoreUnavailableError,
    "57P01": DatastoreUnavailableError,
    "57P02": DatastoreUnavailableError,
    "57P03": DatastoreUnavailableError,
    "SQLITE_CANTOPEN": DatastoreUnavailableError,
}

# sqlite3 pune "no such table" sub SQLITE_ERROR generic => mapăm după mesaj
_SQLITE_MESSAGE_CODES = (
    ("no such table", "SQLITE_NO_SUCH_TABLE"),
    ("UNIQUE constraint failed", "SQLITE_CONSTRAINT_UNIQUE"),
)


def db_error_code(exc: BaseException) -> Optional[str]:
    orig = getattr(exc, "orig", None) or exc

    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)

    msg = str(orig)
    for needle, code in _SQLITE_MESSAGE_CODES:
        if needle in msg:
            return code

    code = getattr(orig, "sqlite_errorname", None)
    if code:
        return str(code)
    return None


def _is_connection_failure(exc: BaseException) -> bool:
    if isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated:
        return True
    # driver-ul nu dă SQLSTATE când conexiunea e refuzată / host-ul nu se rezolvă
    return isinstance(exc, (sa_exc.OperationalError, sa_exc.InterfaceError))


def classify_db_error(exc: BaseException) -> SignupError:
    """
    Transformă o excepție SQLAlchemy/driver în eroare din taxonomie.
    Nu aruncă; întoarce instanța (caller-ul face `raise ... from exc`).
    """
    if isinstance(exc, SignupError):
        return exc

    if isinstance(exc, sa_exc.TimeoutError):
        logger.error("Pool DB epuizat: %s", exc)
        return DatastoreUnavailableError("connection timeout")

    code = db_error_code(exc)
    kind = DB_ERROR_KINDS.get(code) if code else None

    if kind is None and code is None and _is_connection_failure(exc):
        kind = DatastoreUnavailableError

    if kind is None:
        logger.error("Eroare DB neclasificată (code=%s)", code, exc_info=exc)
        return InternalError()

    if kind is SchemaMissingError:
        logger.error("Tabela 'signups' nu există! Rulează migrațiile (code=%s)", code)
    elif kind is DatastoreUnavailableError:
        logger.error("Eroare de conexiune cu baza de date (code=%s): %s", code, exc)
    else:
        logger.info("Eroare DB clasificată %s (code=%s)", kind.__name__, code)

    return kind()
