# FILE: signup_api/routes/signups.py
# Endpoint-uri:
#   - POST /api/signup   -> creare signup (201 / 400 / 409 / 500 / 503)
#   - GET  /api/signups  -> listă signups, cele mai noi primele

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..deps.db import get_db
from ..schemas import ErrorOut, SignupCreatedOut, SignupIn, SignupListOut, SignupOut
from ..services.signups.create_signup import create_signup
from ..services.signups.list_signups import list_signups

router = APIRouter(prefix="/api", tags=["signups"])


@router.post(
    "/signup",
    response_model=SignupCreatedOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}, 500: {"model": ErrorOut}, 503: {"model": ErrorOut}},
)
def signup_route(data: Optional[SignupIn] = None, db: Session = Depends(get_db)):
    # body lipsă = toate câmpurile lipsă ("name required")
    signup = create_signup(db, data=data or SignupIn())
    return SignupCreatedOut(
        message="signup created",
        data=SignupOut.model_validate(signup),
    )


@router.get("/signups", response_model=SignupListOut, responses={500: {"model": ErrorOut}, 503: {"model": ErrorOut}})
def list_signups_route(db: Session = Depends(get_db)):
    rows = [SignupOut.model_validate(s) for s in list_signups(db)]
    return SignupListOut(count=len(rows), data=rows)
