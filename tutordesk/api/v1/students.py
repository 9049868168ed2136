# tutordesk/api/v1/students.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tutordesk.api.deps import get_db
from tutordesk.core.rbac import require_kinds, KIND_ADMIN
from tutordesk.schemas.student import NextIdentifierOut, StudentCreateRequest, StudentOut
from tutordesk.services.identifiers import normalize_category, peek_next_identifier
from tutordesk.services.student_creation import create_student_with_schedule

router = APIRouter()

@router.get("/next-identifier", response_model=NextIdentifierOut,
            dependencies=[Depends(require_kinds(KIND_ADMIN))])
def next_identifier(
    category: str = Query(..., description="anglo | franco | bilingue"),
    db: Session = Depends(get_db),
):
    # só pré-visualização: o número definitivo é reservado no POST
    return NextIdentifierOut(category=normalize_category(category), identifier=peek_next_identifier(db, category))

@router.post("/", response_model=StudentOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_kinds(KIND_ADMIN))])
def create_student(
    body: StudentCreateRequest,
    db: Session = Depends(get_db),
):
    student = create_student_with_schedule(db, body.student, body.teacher_ids, body.payments)
    return StudentOut.model_validate(student)
