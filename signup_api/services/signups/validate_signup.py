# FILE: signup_api/services/signups/validate_signup.py
# Scop:
#   - Validări signup în ordine fixă (prima eroare câștigă):
#       1) name  2) email lipsă  3) email invalid  4) role invalid
#
# Debug:
#   - Regex-ul de email e intenționat "basic" (ceva@ceva.ceva, fără spații).
#     Se aplică pe valoarea trimisă, NU pe cea trimmed => " a@b.ro" e invalid.
#   - role gol ("") = lipsă => se salvează NULL.

import re
from typing import Optional

from ...errors import ValidationError
from ...schemas import SignupIn

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

VALID_ROLES = ("driver", "dispensary", "customer")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.fullmatch(email or ""))


def is_valid_role(role: Optional[str]) -> bool:
    return not role or role.lower() in VALID_ROLES


def validate_signup_or_raise(data: SignupIn) -> None:
    if not data.name or not data.name.strip():
        raise ValidationError("name required")

    if not data.email:
        raise ValidationError("email required")

    if not is_valid_email(data.email):
        raise ValidationError("invalid email")

    if data.role and not is_valid_role(data.role):
        raise ValidationError("invalid role")
