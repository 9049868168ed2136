# tutordesk/db/init_db.py
import logging
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from tutordesk.core.config import settings
from tutordesk.crud.identity import admin_crud
from tutordesk.crud.student import raise_counter, seed_counter, student_crud
from tutordesk.models.admin import Admin
from tutordesk.models.counter import StudentIdCounter
from tutordesk.schemas.identity import AdminCreate
from tutordesk.services.identifiers import PREFIXES, next_sequence_number

logger = logging.getLogger(__name__)

def sync_counters(db: Session) -> None:
    """Garante um contador por prefixo, alinhado ao maior identificador existente."""
    existing = {c.prefix for c in db.scalars(select(StudentIdCounter)).all()}
    for category, prefix in PREFIXES.items():
        last = next_sequence_number(student_crud.list_identifiers_by_prefix(db, prefix), prefix) - 1
        if prefix in existing:
            raise_counter(db, prefix, last)
        else:
            seed_counter(db, prefix, category, last)

def init_db(db: Session) -> None:
    sync_counters(db)

    has_admin = db.scalar(select(func.count()).select_from(Admin))
    if not has_admin:
        admin_crud.create(db, AdminCreate(
            user="admin",
            email=settings.SEED_ADMIN_EMAIL,
            full_name="Admin Demo",
            password=settings.SEED_ADMIN_PASSWORD,
            role="IT supervisor",
        ), commit=False)
        logger.info("seed admin created")

    db.commit()
