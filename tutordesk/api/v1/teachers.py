# tutordesk/api/v1/teachers.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from tutordesk.api.deps import get_db
from tutordesk.core.rbac import require_kinds, KIND_ADMIN
from tutordesk.schemas.teacher import TeacherApprovalIn, TeacherOut
from tutordesk.services.teacher_approval import (
    approve_teacher,
    reject_teacher,
    remove_teacher,
    set_teachers_approval,
)

# todas as transições são exclusivas de admin
router = APIRouter(dependencies=[Depends(require_kinds(KIND_ADMIN))])

@router.post("/approval", response_model=List[TeacherOut])
def bulk_approval(body: TeacherApprovalIn, db: Session = Depends(get_db)):
    return set_teachers_approval(db, body.teacher_ids, body.approved)

@router.post("/{teacher_id}/approve", response_model=TeacherOut)
def approve(teacher_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return approve_teacher(db, teacher_id)

@router.post("/{teacher_id}/reject", response_model=TeacherOut)
def reject(teacher_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return reject_teacher(db, teacher_id)

@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(teacher_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    remove_teacher(db, teacher_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
