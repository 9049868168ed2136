# tutordesk/core/errors.py
"""Typed failures raised by the identity and allocation services.

The API layer maps each one to an HTTP response in ``tutordesk.main``.
Credential failures keep their distinct types internally; the login route
collapses them into one generic 401.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class TutorDeskError(Exception):
    code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


# ---------- credenciais ----------
class NotFound(TutorDeskError):
    """No account matches the identifier."""
    code = "NOT_FOUND"
    http_status = 401


class InvalidCredential(TutorDeskError):
    """An account matched but the secret did not."""
    code = "INVALID_CREDENTIAL"
    http_status = 401


# ---------- cadastro ----------
class RecordNotFound(TutorDeskError):
    """An administrative lookup by id found nothing (or only a deleted row)."""
    code = "RECORD_NOT_FOUND"
    http_status = 404


# ---------- validação ----------
class ValidationError(TutorDeskError):
    code = "VALIDATION_ERROR"
    http_status = 422

    def __init__(self, field: str, message: str):
        super().__init__(message, details={"field": field})
        self.field = field

    def to_response(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "field": self.field, "details": self.details}


# ---------- alocação / armazenamento ----------
class AllocationConflict(TutorDeskError):
    """Concurrent allocation collided; safe to retry."""
    code = "ALLOCATION_CONFLICT"
    http_status = 409


class StoreUnavailable(TutorDeskError):
    code = "STORE_UNAVAILABLE"
    http_status = 503


class PartialCreationError(TutorDeskError):
    # mantido na taxonomia; a criação transacional o torna inalcançável
    code = "PARTIAL_CREATION"
    http_status = 500
