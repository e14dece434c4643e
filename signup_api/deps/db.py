# FILE: signup_api/deps/db.py
# Scop:
#   - Dependency pentru Session SQLAlchemy (per request), din Database-ul aplicației (app.state).
#
# Debug:
#   - Dacă ai conexiuni blocate, verifică dacă requesturile se închid corect
#     și dacă ai vreun while/await care ține session deschis.

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from ..database import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    with get_database(request).session() as db:
        yield db
