# tutordesk/services/student_creation.py
"""Creates a student together with its teacher relations and payment schedule.

Everything after validation runs in one transaction: identifier reservation,
the student row, one relation and one payment per selected teacher. Any
failure (including an interrupted request) rolls the whole unit back, so a
student can never exist without its relations and payments.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from tutordesk.core.config import settings
from tutordesk.core.errors import StoreUnavailable, ValidationError
from tutordesk.crud.identity import teacher_crud
from tutordesk.crud.student import payment_crud, relation_crud, student_crud
from tutordesk.models.student import Student
from tutordesk.models.teacher import Teacher
from tutordesk.schemas.student import PaymentInput, StudentCreate
from tutordesk.services.identifiers import allocate_identifier, normalize_category
from tutordesk.services.payment_schedule import compute_next_due_date

logger = logging.getLogger(__name__)

def _require(value: Any, field: str, message: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(field, message)
    return text

def _as_payment(tid: int, value: Any) -> PaymentInput:
    if isinstance(value, PaymentInput):
        return value
    try:
        return PaymentInput.model_validate(value)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(["payments", str(tid), *(str(p) for p in first.get("loc", ()))])
        raise ValidationError(field, f"Invalid payment for teacher {tid}: {first.get('msg')}") from None

def _payments_by_teacher(payments: Mapping[Any, Any]) -> Dict[int, Any]:
    by_teacher = {}
    for key, value in (payments or {}).items():
        try:
            by_teacher[int(key)] = value
        except (TypeError, ValueError):
            raise ValidationError("payments", f"Payments must be keyed by teacher id, got {key!r}") from None
    return by_teacher

def validate_submission(
    db: Session,
    fields: StudentCreate,
    teacher_ids: Sequence[int],
    payments: Mapping[int, Any],
) -> tuple[List[Teacher], Dict[int, PaymentInput]]:
    """Checks the submission without writing anything.

    Returns the selected teachers in submission order and the parsed payment
    entries keyed by teacher id.
    """
    _require(fields.full_name, "full_name", "Student name is required")
    _require(fields.guardian_name, "guardian_name", "Guardian name is required")
    _require(fields.guardian_phone, "guardian_phone", "Guardian phone is required")
    normalize_category(fields.category)

    ids = list(dict.fromkeys(teacher_ids or []))
    if not ids:
        raise ValidationError("teacher_ids", "Please select at least one teacher")

    by_teacher = _payments_by_teacher(payments)
    parsed: Dict[int, PaymentInput] = {}
    for tid in ids:
        raw = by_teacher.get(tid)
        if raw is None:
            raise ValidationError(f"payments.{tid}.amount", f"Payment amount missing for teacher {tid}")
        payment = _as_payment(tid, raw)
        if payment.amount <= 0:
            raise ValidationError(f"payments.{tid}.amount", f"Payment amount must be positive for teacher {tid}")
        parsed[tid] = payment

    found = {t.id: t for t in teacher_crud.get_many(db, ids)}
    teachers = []
    for tid in ids:
        teacher = found.get(tid)
        if teacher is None or not teacher.is_assignable:
            raise ValidationError("teacher_ids", f"Teacher {tid} is not available for assignment")
        teachers.append(teacher)
    return teachers, parsed

def create_student_with_schedule(
    db: Session,
    fields: StudentCreate,
    teacher_ids: Sequence[int],
    payments: Mapping[int, Any],
) -> Student:
    teachers, parsed = validate_submission(db, fields, teacher_ids, payments)
    category = normalize_category(fields.category)
    attempts = max(1, settings.ALLOCATION_MAX_RETRIES)

    for attempt in range(1, attempts + 1):
        try:
            identifier = allocate_identifier(db, category, commit=False)
            student = student_crud.create(db, {
                "identifier": identifier,
                "user": identifier,
                "full_name": fields.full_name.strip(),
                "guardian_name": fields.guardian_name.strip(),
                "guardian_phone": fields.guardian_phone.strip(),
                "class_name": fields.class_name,
                "quarter": fields.quarter,
                "days_per_week": fields.days_per_week,
                "category": category,
            }, commit=False)
            relation_crud.create_many(
                db, ({"student_id": student.id, "teacher_id": t.id} for t in teachers), commit=False,
            )
            payment_crud.create_many(db, (
                {
                    "student_id": student.id,
                    "teacher_id": t.id,
                    "amount": parsed[t.id].amount,
                    "payment_date": parsed[t.id].payment_date,
                    "next_payment_due": compute_next_due_date(parsed[t.id].payment_date),
                }
                for t in teachers
            ), commit=False)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("student insert collided, retrying", extra={"category": category, "attempt": attempt})
            continue
        except (OperationalError, InterfaceError) as exc:
            db.rollback()
            logger.error("store unavailable while creating student", exc_info=True)
            raise StoreUnavailable("Não foi possível gravar o aluno.") from exc
        except BaseException:
            db.rollback()
            raise

        db.refresh(student)
        logger.info("student created", extra={"identifier": student.identifier, "student_id": student.id})
        return student

    raise StoreUnavailable(f"Não foi possível criar o aluno após {attempts} tentativas.")
