# FILE: signup_api/schemas.py
# Scop:
#   - Schemas Pydantic (FastAPI) pentru /api/signup, /api/signups, /api/health.
#
# Debug:
#   - Validările de business (name/email/role) se fac SERVER-SIDE în services/signups,
#     nu aici: ordinea și mesajele de eroare trebuie să fie exact cele din service.
#     SignupIn doar acceptă câmpurile și le aduce la str.

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class SignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any):
        # doar numerele se acceptă ca text; liste/dict/bool => 400 "invalid request body"
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        raise ValueError("must be a string")


class SignupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Optional[str]
    created_at: datetime


class SignupCreatedOut(BaseModel):
    success: bool = True
    message: str
    data: SignupOut


class SignupListOut(BaseModel):
    success: bool = True
    count: int
    data: List[SignupOut]


class HealthOut(BaseModel):
    success: bool
    message: str
    database: Literal["connected", "disconnected"]
    timestamp: datetime


class ErrorOut(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
