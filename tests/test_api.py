"""HTTP surface: login, student creation, identifier preview, due-date helper."""
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

import tutordesk.api.v1.students as students_api
from tutordesk.core.tokens import create_access_token, decode_access
from tutordesk.models.admin import Admin


def _admin_headers(admin_id=1):
    return {"Authorization": f"Bearer {create_access_token(sub='root', kind='admin', identity_id=admin_id)}"}


# ---------- login ----------
def test_admin_login_returns_token_and_records_last_login(client, db, make_admin):
    admin = make_admin()

    res = client.post("/api/v1/auth/login", json={
        "identifier": " Admin@X.com ", "secret": "s3cret-pass", "role_hint": "admin",
    })

    assert res.status_code == 200
    body = res.json()
    assert body["identity"]["kind"] == "admin"
    payload = decode_access(body["access_token"])
    assert payload["kind"] == "admin" and payload["iid"] == admin.id
    db.expire_all()
    assert db.scalar(select(Admin).where(Admin.id == admin.id)).last_login is not None


def test_login_failures_are_indistinguishable(client, make_admin):
    make_admin()

    wrong_secret = client.post("/api/v1/auth/login", json={
        "identifier": "admin@x.com", "secret": "nope", "role_hint": "admin",
    })
    no_account = client.post("/api/v1/auth/login", json={
        "identifier": "ghost@x.com", "secret": "nope", "role_hint": "admin",
    })

    assert wrong_secret.status_code == no_account.status_code == 401
    assert wrong_secret.json() == no_account.json()


def test_student_login(client, make_student):
    make_student("ST00B9", guardian_name="Paul Mbarga", category="bilingue")

    res = client.post("/api/v1/auth/login", json={"identifier": "st00b9", "secret": " paul mbarga"})

    assert res.status_code == 200
    assert res.json()["identity"]["kind"] == "student"
    assert res.json()["identity"]["user"] == "ST00B9"


# ---------- criação de aluno ----------
def test_create_student_requires_admin(client, make_teacher):
    t = make_teacher()
    payload = {
        "student": {"full_name": "A", "guardian_name": "G", "guardian_phone": "1", "category": "anglo"},
        "teacher_ids": [t.id],
        "payments": {str(t.id): {"amount": "100", "payment_date": "2024-01-31"}},
    }
    teacher_token = create_access_token(sub=t.user, kind="teacher", identity_id=t.id)

    assert client.post("/api/v1/students/", json=payload).status_code == 401
    forbidden = client.post("/api/v1/students/", json=payload, headers={"Authorization": f"Bearer {teacher_token}"})
    assert forbidden.status_code == 403


def test_create_student(client, make_teacher):
    t = make_teacher()

    res = client.post("/api/v1/students/", headers=_admin_headers(), json={
        "student": {
            "full_name": "Alice Martin", "guardian_name": "Jane Doe",
            "guardian_phone": "+237600000000", "category": "bilingue", "days_per_week": 2,
        },
        "teacher_ids": [t.id],
        "payments": {str(t.id): {"amount": "25000", "payment_date": "2023-01-31", "next_payment_due": "2023-06-01"}},
    })

    assert res.status_code == 201
    body = res.json()
    assert body["identifier"] == body["user"] == "ST00B1"
    assert body["payments"][0]["next_payment_due"] == "2023-02-28"


def test_create_student_validation_error_names_field(client):
    res = client.post("/api/v1/students/", headers=_admin_headers(), json={
        "student": {"full_name": "A", "guardian_name": "G", "guardian_phone": "1", "category": "anglo"},
        "teacher_ids": [],
        "payments": {},
    })

    assert res.status_code == 422
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert res.json()["field"] == "teacher_ids"


def test_next_identifier_preview(client, make_student):
    make_student("ST00A4")

    res = client.get("/api/v1/students/next-identifier", params={"category": "anglo"}, headers=_admin_headers())

    assert res.status_code == 200
    assert res.json() == {"category": "anglo", "identifier": "ST00A5"}


# ---------- utilitários ----------
def test_next_due_endpoint(client):
    res = client.get("/api/v1/payments/next-due", params={"payment_date": "2024-01-31"})
    assert res.json() == {"payment_date": "2024-01-31", "next_payment_due": "2024-02-29"}


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_database_outage_maps_to_503(client, make_teacher, monkeypatch):
    def down(*args, **kwargs):
        raise OperationalError("INSERT INTO students", {}, Exception("server closed the connection"))

    monkeypatch.setattr(students_api, "create_student_with_schedule", down)
    t = make_teacher()

    res = client.post("/api/v1/students/", headers=_admin_headers(), json={
        "student": {"full_name": "A", "guardian_name": "G", "guardian_phone": "1", "category": "anglo"},
        "teacher_ids": [t.id],
        "payments": {str(t.id): {"amount": "100", "payment_date": "2024-01-31"}},
    })

    assert res.status_code == 503
    assert res.json()["code"] == "STORE_UNAVAILABLE"
