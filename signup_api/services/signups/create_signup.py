# FILE: signup_api/services/signups/create_signup.py
# Scop:
#   - Creare signup: validări -> pre-check email duplicat -> INSERT -> rând persistat.
#
# Dublă protecție la duplicate (intenționat, ambele rămân):
#   - pre-check SELECT lower(email): răspuns rapid 409 pentru user.
#   - UNIQUE uq_signups_email_lower: garanția reală; două request-uri simultane pot trece
#     amândouă de pre-check, iar al doilea INSERT primește IntegrityError => tot 409.
#
# Debug:
#   - Dacă un duplicat iese 500: verifică indexul unic și DB_ERROR_KINDS (services/db_errors.py).

import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import ConflictError
from ...models import Signup
from ...schemas import SignupIn
from ..db_errors import classify_db_error
from .validate_signup import validate_signup_or_raise

logger = logging.getLogger(__name__)


def find_signup_id_by_email(db: Session, email: str):
    return db.query(Signup.id).filter(func.lower(Signup.email) == func.lower(email)).first()


def create_signup(db: Session, *, data: SignupIn) -> Signup:
    validate_signup_or_raise(data)

    email = data.email.strip()
    email_norm = email.lower()
    logger.info("Signup primit: email=%s role=%s", email_norm, data.role)

    try:
        existing = find_signup_id_by_email(db, email)
    except SQLAlchemyError as exc:
        db.rollback()
        raise classify_db_error(exc) from exc

    if existing:
        logger.info("Signup duplicat (pre-check): %s", email_norm)
        raise ConflictError()

    signup = Signup(
        name=data.name.strip(),
        email=email,
        role=(data.role.strip() if data.role else None),
        created_at=datetime.now(timezone.utc),
    )

    db.add(signup)
    try:
        db.commit()
        db.refresh(signup)
    except IntegrityError as exc:
        db.rollback()
        err = classify_db_error(exc)
        if isinstance(err, ConflictError):
            logger.warning("Signup duplicat (race la INSERT): %s", email_norm)
        raise err from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise classify_db_error(exc) from exc

    logger.info("Signup creat: id=%s email=%s", signup.id, email_norm)
    return signup
