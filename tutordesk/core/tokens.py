# tutordesk/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from tutordesk.core.config import settings

ALGO = settings.ALGORITHM
IDENTITY_KINDS = ("admin", "teacher", "student")

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _exp(minutes: int = 15) -> datetime:
    return _now() + timedelta(minutes=minutes)

def create_access_token(*, sub: str, kind: str, identity_id: int) -> str:
    """Access token curto (minutos), assinado com SECRET_KEY."""
    payload: Dict[str, Any] = {
        "type": "access",
        "sub": sub,
        "kind": kind,
        "iid": identity_id,
        "jti": uuid.uuid4().hex,
        "iat": int(_now().timestamp()),
        "exp": int(_exp(settings.ACCESS_TOKEN_EXPIRE_MINUTES).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)

def decode_access(token: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get("type") != "access":
        return None
    if not payload.get("sub") or payload.get("kind") not in IDENTITY_KINDS:
        return None
    if not isinstance(payload.get("iid"), int):
        return None
    return payload
