from typing import Iterable, Optional, Type, TypeVar
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session
from tutordesk.crud.base import CRUDBase
from tutordesk.models.admin import Admin
from tutordesk.models.teacher import Teacher
from tutordesk.models.student import Student
from tutordesk.schemas.identity import AdminCreate, TeacherCreate
from tutordesk.core.security import hash_password

M = TypeVar("M", Admin, Teacher)

def find_by_handle_or_email(db: Session, model: Type[M], identifier: str, *, extra_filters: Iterable = ()) -> Optional[M]:
    """Case-insensitive match on ``user`` or ``email``; most recent row wins on ambiguity."""
    ident = identifier.strip().lower()
    stmt = (
        select(model)
        .where(
            or_(func.lower(model.user) == ident, func.lower(model.email) == ident),
            model.deleted_at.is_(None),
            *extra_filters,
        )
        .order_by(model.id.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()

def find_student_by_handle(db: Session, identifier: str) -> Optional[Student]:
    ident = identifier.strip().lower()
    stmt = (
        select(Student)
        .where(func.lower(Student.user) == ident, Student.deleted_at.is_(None))
        .order_by(Student.id.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()

class CRUDAdmin(CRUDBase[Admin, AdminCreate]):
    def create(self, db: Session, obj_in: AdminCreate, extra=None, *, commit: bool = True) -> Admin:
        data = obj_in.model_dump()
        data["password"] = hash_password(data["password"])
        data["email"] = data["email"].strip().lower()
        return super().create(db, data, extra, commit=commit)

class CRUDTeacher(CRUDBase[Teacher, TeacherCreate]):
    def create(self, db: Session, obj_in: TeacherCreate, extra=None, *, commit: bool = True) -> Teacher:
        data = obj_in.model_dump()
        data["password"] = hash_password(data["password"])
        data["email"] = data["email"].strip().lower()
        return super().create(db, data, extra, commit=commit)

admin_crud = CRUDAdmin(Admin)
teacher_crud = CRUDTeacher(Teacher)
