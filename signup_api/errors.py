# FILE: signup_api/errors.py
# Scop:
#   - Taxonomia de erori a serviciului (400 / 409 / 500 / 503).
#   - Sunt HTTPException => FastAPI le rutează ca pe orice HTTPException din services.
#   - Handler-ul din main.py le transformă în {success: false, error: <mesaj>}.

from typing import Optional

from fastapi import HTTPException, status


class SignupError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class ValidationError(SignupError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid request"


class ConflictError(SignupError):
    status_code = status.HTTP_409_CONFLICT
    message = "email already registered"


class SchemaMissingError(SignupError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "signups table not found, run the migrations first"


class DatastoreUnavailableError(SignupError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "database connection error"


class InternalError(SignupError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "internal server error"
