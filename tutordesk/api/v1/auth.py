# tutordesk/api/v1/auth.py
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tutordesk.api.deps import get_db
from tutordesk.core.errors import InvalidCredential, NotFound
from tutordesk.core.security import hash_password, password_needs_upgrade
from tutordesk.core.tokens import create_access_token
from tutordesk.models.admin import Admin
from tutordesk.models.student import Student
from tutordesk.models.teacher import Teacher
from tutordesk.schemas.identity import Identity, LoginRequest, LoginResponse
from tutordesk.services.credentials import resolve_credentials

logger = logging.getLogger(__name__)

router = APIRouter()

_MODELS = {"admin": Admin, "teacher": Teacher, "student": Student}

# ---------- helpers ----------
def _record_login(db: Session, identity: Identity, secret: str) -> None:
    """Bookkeeping after a successful sign-in: last_login and hash upgrade."""
    row: Union[Admin, Teacher, Student, None] = db.get(_MODELS[identity.kind], identity.id)
    if row is None:
        return
    row.last_login = datetime.now(timezone.utc)
    # bcrypt legado -> argon2 na primeira entrada válida
    stored = getattr(row, "password", None)
    if stored and password_needs_upgrade(stored):
        row.password = hash_password(secret)
    db.add(row); db.commit()

# ---------- endpoints ----------
@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    try:
        identity = resolve_credentials(db, body.identifier, body.secret, body.role_hint)
    except (NotFound, InvalidCredential) as exc:
        # o cliente não distingue "conta inexistente" de "segredo errado"
        logger.info("login rejected", extra={"error_code": exc.code, "kind": body.role_hint.value})
        raise HTTPException(status_code=401, detail="Invalid credentials.") from None

    _record_login(db, identity, body.secret)
    token = create_access_token(sub=identity.user, kind=identity.kind, identity_id=identity.id)
    return LoginResponse(access_token=token, identity=identity)
