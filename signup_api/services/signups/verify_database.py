# FILE: signup_api/services/signups/verify_database.py
# Scop:
#   - Verificare la startup: DB accesibilă + tabela `signups` există.
#   - Doar loguri (nu oprește pornirea); /api/health raportează starea ulterior.

import logging

from sqlalchemy.exc import SQLAlchemyError

from ...database import Database
from ...errors import SignupError
from ...models import Signup

logger = logging.getLogger(__name__)


def verify_database(database: Database) -> bool:
    try:
        database.ping()
        logger.info("Conexiunea cu baza de date verificată")

        if not database.has_table(Signup.__tablename__):
            logger.error(
                "ATENȚIE: tabela %r nu există! Rulează migrațiile înainte de a accepta signups.",
                Signup.__tablename__,
            )
            return False

        logger.info("Tabela %r găsită", Signup.__tablename__)
        return True
    except (SignupError, SQLAlchemyError) as exc:
        logger.error(
            "Eroare la conectarea cu baza de date: %s. Verifică dacă: DB rulează, "
            "credențialele din .env sunt corecte, baza de date există.",
            exc,
        )
        return False
