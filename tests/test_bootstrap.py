"""Startup migrations and seed against a fresh database file."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from tutordesk.core.config import settings
from tutordesk.db.bootstrap import run_migrations_and_seed
from tutordesk.db.session import make_engine
from tutordesk.models.admin import Admin
from tutordesk.models.counter import StudentIdCounter
from tutordesk.schemas.identity import RoleHint
from tutordesk.services.credentials import resolve_credentials
from tutordesk.services.identifiers import allocate_identifier


def test_migrations_and_seed_are_repeatable(tmp_path):
    url = f"sqlite:///{tmp_path / 'boot.db'}"

    run_migrations_and_seed(url)
    run_migrations_and_seed(url)

    engine = make_engine(url)
    try:
        with Session(engine) as db:
            counters = {c.prefix: (c.category, c.last_value) for c in db.scalars(select(StudentIdCounter))}
            assert counters == {"ST00A": ("anglo", 0), "ST00F": ("franco", 0), "ST00B": ("bilingue", 0)}

            admins = db.scalars(select(Admin)).all()
            assert len(admins) == 1

            identity = resolve_credentials(db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD, RoleHint.admin)
            assert identity.kind == "admin"
            assert allocate_identifier(db, "bilingue") == "ST00B1"
    finally:
        engine.dispose()
