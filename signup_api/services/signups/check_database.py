# FILE: signup_api/services/signups/check_database.py
# Scop:
#   - Healthcheck: SELECT 1 prin pool. Întoarce connected / disconnected, NU aruncă.
#
# Debug:
#   - "disconnected" cu DB pornită => verifică DB_HOST/DB_PORT și DB_CONNECT_TIMEOUT_MS
#     (pool saturat apare tot ca disconnected).

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from ...database import Database
from ...errors import SignupError
from ...schemas import HealthOut

logger = logging.getLogger(__name__)


def check_database(database: Database) -> HealthOut:
    try:
        database.ping()
    except (SignupError, SQLAlchemyError) as exc:
        logger.warning("Healthcheck: baza de date nu e accesibilă: %s", exc)
        return HealthOut(
            success=False,
            message="server is running, but the database is not reachable",
            database="disconnected",
            timestamp=datetime.now(timezone.utc),
        )

    return HealthOut(
        success=True,
        message="server is running",
        database="connected",
        timestamp=datetime.now(timezone.utc),
    )
