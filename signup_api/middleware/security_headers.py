# FILE: signup_api/middleware/security_headers.py
# Scop:
#   - Headere de securitate pentru un API JSON (fără HTML servit de aici).
#   - Răspunsurile /api nu se cache-uiesc (listă signups = date personale).
#
# IMPORTANT:
#   - CORS se face separat (CORSMiddleware din main.py); aici nu atingem Access-Control-*.

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, is_debug: bool):
        super().__init__(app)
        self.is_debug = is_debug

    async def dispatch(self, request: Request, call_next):
        resp = await call_next(request)

        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"

        if request.url.path.startswith("/api"):
            resp.headers["Cache-Control"] = "no-store"
            resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        # HSTS doar dacă rulezi HTTPS în spate (în prod)
        if not self.is_debug and request.url.scheme == "https":
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return resp
