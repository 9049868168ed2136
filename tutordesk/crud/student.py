from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy import select, update
from sqlalchemy.orm import Session
from tutordesk.crud.base import CRUDBase
from tutordesk.models.student import Student
from tutordesk.models.counter import StudentIdCounter
from tutordesk.models.payment import Payment, StudentTeacherRelation
from tutordesk.schemas.student import StudentCreate

class CRUDStudent(CRUDBase[Student, StudentCreate]):
    def list_identifiers_by_prefix(self, db: Session, prefix: str) -> List[str]:
        # inclui removidos logicamente: um identificador nunca é reutilizado
        stmt = select(Student.identifier).where(Student.identifier.startswith(prefix, autoescape=True))
        return [row for row in db.scalars(stmt).all() if row]

student_crud = CRUDStudent(Student)
relation_crud = CRUDBase[StudentTeacherRelation, BaseModel](StudentTeacherRelation)
payment_crud = CRUDBase[Payment, BaseModel](Payment)

# ---------- contadores de identificador ----------
def bump_counter(db: Session, prefix: str) -> Optional[int]:
    """Atomically increments the prefix counter and returns the new value.

    The UPDATE holds the row (or SQLite write) lock until the caller's
    transaction ends. Returns None when the counter row does not exist yet.
    """
    res = db.execute(
        update(StudentIdCounter)
        .where(StudentIdCounter.prefix == prefix)
        .values(last_value=StudentIdCounter.last_value + 1)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        return None
    return db.scalar(select(StudentIdCounter.last_value).where(StudentIdCounter.prefix == prefix))

def raise_counter(db: Session, prefix: str, value: int) -> None:
    db.execute(
        update(StudentIdCounter)
        .where(StudentIdCounter.prefix == prefix, StudentIdCounter.last_value < value)
        .values(last_value=value)
        .execution_options(synchronize_session=False)
    )

def seed_counter(db: Session, prefix: str, category: str, value: int) -> None:
    # PK em prefix: seeds concorrentes colidem com IntegrityError no flush
    db.add(StudentIdCounter(prefix=prefix, category=category, last_value=value))
    db.flush()
