# FILE: signup_api/services/signups/list_signups.py
# Scop:
#   - Listare signups, cele mai noi primele (created_at DESC, apoi id DESC la egalitate).
#   - Read-only; listă goală e rezultat valid.

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import InternalError
from ...models import Signup
from ..db_errors import classify_db_error

logger = logging.getLogger(__name__)


def list_signups(db: Session) -> List[Signup]:
    try:
        return (
            db.query(Signup)
            .order_by(Signup.created_at.desc(), Signup.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        err = classify_db_error(exc)
        if isinstance(err, InternalError):
            raise InternalError("failed to read signups") from exc
        raise err from exc
