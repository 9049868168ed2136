# tutordesk/core/rbac.py
from fastapi import Depends, HTTPException, status
from tutordesk.api.deps import SessionContext, get_session_context

KIND_ADMIN = "admin"

def require_kinds(*kinds: str):
    allowed = set(kinds)
    def dep(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
        if ctx.kind not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return ctx
    return dep
