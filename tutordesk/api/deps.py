from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from tutordesk.db.session import get_db  # noqa: F401  (reexportado para as rotas)
from tutordesk.core.tokens import decode_access

# ----------------------------------------------------------------------
# Contexto explícito da sessão: substitui o "perfil atual" global
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class SessionContext:
    user: str
    kind: str
    identity_id: int

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    return parts[1]

def get_session_context(token: str = Depends(get_bearer_token)) -> SessionContext:
    payload = decode_access(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")
    return SessionContext(user=payload["sub"], kind=payload["kind"], identity_id=payload["iid"])
