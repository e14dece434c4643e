# FILE: signup_api/routes/health.py
# Endpoint: GET /api/health
#   - 200 {database: "connected"} / 503 {database: "disconnected"}
#   - Folosit de uptime monitor + deploy scripts.

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..database import Database
from ..deps.db import get_database
from ..schemas import HealthOut
from ..services.signups.check_database import check_database

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOut, responses={503: {"model": HealthOut}})
def health_route(database: Database = Depends(get_database)):
    out = check_database(database)
    if not out.success:
        return JSONResponse(status_code=503, content=out.model_dump(mode="json"))
    return out
