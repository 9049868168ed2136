# tutordesk/services/credentials.py
"""Login resolution across Admin, Teacher and Student accounts.

Admins and teachers carry a password hash. Students have no password: the
guardian's name is compared by normalised equality. That weaker scheme is kept
for compatibility with existing accounts and lives only in
``_verify_student_secret``, so it can be swapped for a hash without touching
callers.
"""
from __future__ import annotations

import logging
from typing import Union

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from tutordesk.core.errors import InvalidCredential, NotFound, StoreUnavailable, ValidationError
from tutordesk.core.security import dummy_verify, verify_password
from tutordesk.crud.identity import find_by_handle_or_email, find_student_by_handle
from tutordesk.models.admin import Admin
from tutordesk.models.student import Student
from tutordesk.models.teacher import Teacher
from tutordesk.schemas.identity import Identity, RoleHint

logger = logging.getLogger(__name__)

def normalize_identifier(identifier: str) -> str:
    return (identifier or "").strip().lower()

def _normalize_secret(value: str) -> str:
    return (value or "").strip().casefold()

def _verify_student_secret(secret: str, student: Student) -> bool:
    return bool(student.guardian_name) and _normalize_secret(secret) == _normalize_secret(student.guardian_name)

def to_identity(record: Union[Admin, Teacher, Student]) -> Identity:
    if isinstance(record, Admin):
        kind, category = "admin", None
    elif isinstance(record, Teacher):
        kind, category = "teacher", record.category
    else:
        kind, category = "student", record.category
    return Identity(
        kind=kind,
        id=record.id,
        user=record.user,
        full_name=record.full_name,
        email=getattr(record, "email", None),
        category=category,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )

def _resolve_admin(db: Session, ident: str, secret: str) -> Identity:
    admin = find_by_handle_or_email(db, Admin, ident)
    if admin is None:
        dummy_verify()
        raise NotFound("Admin not found")
    if not verify_password(secret, admin.password):
        raise InvalidCredential("Invalid password")
    return to_identity(admin)

def _resolve_member(db: Session, ident: str, secret: str) -> Identity:
    teacher = find_by_handle_or_email(db, Teacher, ident, extra_filters=(Teacher.is_approved.is_(True),))
    if teacher is not None:
        # professor encontrado: nunca cai para o caminho de aluno
        if not verify_password(secret, teacher.password):
            raise InvalidCredential("Invalid password")
        return to_identity(teacher)

    student = find_student_by_handle(db, ident)
    if student is None:
        dummy_verify()
        raise NotFound("User not found")
    if not _verify_student_secret(secret, student):
        raise InvalidCredential("Guardian name does not match")
    return to_identity(student)

def resolve_credentials(db: Session, identifier: str, secret: str, role_hint: RoleHint | str = RoleHint.none) -> Identity:
    """Verifies ``(identifier, secret)`` and returns who signed in.

    Raises NotFound when no account matches, InvalidCredential when one
    matches but the secret does not, and StoreUnavailable when the database
    cannot be read. Performs no writes.
    """
    try:
        hint = RoleHint(role_hint) if role_hint else RoleHint.none
    except ValueError:
        raise ValidationError("role_hint", f"Unknown role hint: {role_hint!r}") from None
    ident = normalize_identifier(identifier)
    if not ident:
        raise NotFound("User not found")
    try:
        if hint is RoleHint.admin:
            return _resolve_admin(db, ident, secret or "")
        return _resolve_member(db, ident, secret or "")
    except DBAPIError as exc:
        logger.error("credential store unavailable", exc_info=True)
        raise StoreUnavailable("Credential store unavailable.") from exc
