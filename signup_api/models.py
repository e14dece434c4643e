# FILE: signup_api/models.py
# Scop:
#   - Model DB: Signup (name, email, role opțional, created_at).
#
# Observații:
#   - UNIQUE pe lower(email) => previne dubluri case-insensitive, inclusiv la race
#     între pre-check și INSERT (indexul e garanția, pre-check-ul e doar UX).
#   - role NULL e caz valid (signup fără rol).
#   - Tabela e creată de migrații în prod; create_all doar în dev (DB_AUTO_CREATE=true).

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, func

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Signup(Base):
    __tablename__ = "signups"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(String(32), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


Index("uq_signups_email_lower", func.lower(Signup.email), unique=True)
