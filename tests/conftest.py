"""Shared fixtures: a fresh SQLite file database per test and a FastAPI client.

Invariants:
    - Environment is pointed at a throwaway DATA_DIR before tutordesk is imported
    - Every test gets its own database file (threads in the concurrency tests share it)
    - get_db is overridden so routes use the test database
"""
import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="tutordesk-tests-")
os.environ.setdefault("DATA_DIR", _TMP)
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'app.db')}")
os.environ.setdefault("LOG_FORMAT", "plain")
os.environ.setdefault("SECRET_KEY", "test-secret")


import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from tutordesk.crud.identity import admin_crud, teacher_crud  # noqa: E402
from tutordesk.db.session import make_engine  # noqa: E402
from tutordesk.models import Base  # noqa: E402
from tutordesk.models.student import Student  # noqa: E402
from tutordesk.schemas.identity import AdminCreate, TeacherCreate  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from tutordesk.api.deps import get_db
    from tutordesk.main import api

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = override_get_db
    # sem "with": o startup (migrações + seed) não roda nos testes
    yield TestClient(api)
    api.dependency_overrides.clear()


# ---------- fábricas ----------
@pytest.fixture
def make_admin(db):
    def _make(user="root", email="admin@x.com", password="s3cret-pass", **extra):
        return admin_crud.create(db, AdminCreate(user=user, email=email, full_name="Admin Root", password=password, **extra))
    return _make


@pytest.fixture
def make_teacher(db):
    counter = {"n": 0}

    def _make(user=None, email=None, password="teach-pass", is_approved=True, **extra):
        counter["n"] += 1
        n = counter["n"]
        return teacher_crud.create(db, TeacherCreate(
            user=user or f"teacher{n}",
            email=email or f"teacher{n}@x.com",
            full_name=f"Teacher {n}",
            password=password,
            is_approved=is_approved,
            **extra,
        ))
    return _make


@pytest.fixture
def make_student(db):
    def _make(identifier, guardian_name="Jane Doe", category="anglo", **extra):
        student = Student(
            identifier=identifier,
            user=identifier,
            full_name=extra.pop("full_name", f"Student {identifier}"),
            guardian_name=guardian_name,
            guardian_phone=extra.pop("guardian_phone", "+237600000000"),
            category=category,
            **extra,
        )
        db.add(student); db.commit(); db.refresh(student)
        return student
    return _make
