# tutordesk/schemas/identity.py
from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel

IdentityKind = Literal["admin", "teacher", "student"]

class RoleHint(str, Enum):
    admin = "admin"
    none = "none"

class Identity(BaseModel):
    kind: IdentityKind
    id: int
    user: str
    full_name: str
    email: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class LoginRequest(BaseModel):
    identifier: str
    secret: str
    role_hint: RoleHint = RoleHint.none

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    identity: Identity

class AdminCreate(BaseModel):
    user: str
    email: str
    full_name: str
    password: str
    role: str = "coordonateur"
    whatsapp_number: Optional[str] = None

class TeacherCreate(BaseModel):
    user: str
    email: str
    full_name: str
    password: str
    category: Optional[str] = None
    contact: Optional[str] = None
    town: Optional[str] = None
    is_approved: Optional[bool] = None
