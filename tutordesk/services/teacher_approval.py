# tutordesk/services/teacher_approval.py
"""Admin transitions on a teacher's approval state.

``is_approved`` has three values: NULL (no decision yet), True and False.
Only True lets the teacher sign in; anything but False keeps the teacher
assignable to new students. A removed teacher is soft-deleted and drops out
of both.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from sqlalchemy.orm import Session

from tutordesk.core.errors import RecordNotFound
from tutordesk.crud.identity import teacher_crud
from tutordesk.models.teacher import Teacher

logger = logging.getLogger(__name__)

def _get_teacher(db: Session, teacher_id: int) -> Teacher:
    teacher = teacher_crud.get(db, teacher_id)
    if teacher is None:
        raise RecordNotFound(f"Teacher {teacher_id} not found")
    return teacher

def set_teacher_approval(db: Session, teacher_id: int, approved: bool) -> Teacher:
    teacher = _get_teacher(db, teacher_id)
    teacher.is_approved = approved
    db.commit(); db.refresh(teacher)
    logger.info("teacher approval changed", extra={"teacher_id": teacher.id, "approved": approved})
    return teacher

def approve_teacher(db: Session, teacher_id: int) -> Teacher:
    return set_teacher_approval(db, teacher_id, True)

def reject_teacher(db: Session, teacher_id: int) -> Teacher:
    return set_teacher_approval(db, teacher_id, False)

def set_teachers_approval(db: Session, teacher_ids: Sequence[int], approved: bool) -> List[Teacher]:
    """Applies one decision to several teachers; all ids must exist or nothing changes."""
    ids = list(dict.fromkeys(teacher_ids))
    found = {t.id: t for t in teacher_crud.get_many(db, ids) if t.deleted_at is None}
    missing = [tid for tid in ids if tid not in found]
    if missing:
        raise RecordNotFound(f"Teachers not found: {missing}", details={"teacher_ids": missing})
    for teacher in found.values():
        teacher.is_approved = approved
    db.commit()
    logger.info("teacher approval changed", extra={"teacher_ids": ids, "approved": approved})
    return [found[tid] for tid in ids]

def remove_teacher(db: Session, teacher_id: int) -> Teacher:
    # logical delete: relações e pagamentos antigos continuam apontando para a linha
    teacher = teacher_crud.soft_delete(db, teacher_id)
    if teacher is None:
        raise RecordNotFound(f"Teacher {teacher_id} not found")
    logger.info("teacher removed", extra={"teacher_id": teacher.id})
    return teacher
