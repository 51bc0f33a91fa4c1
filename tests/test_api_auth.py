"""Login, registration and the access-control gate, end to end."""
from datetime import timedelta

import pytest

from school_admin.core.security import issue_session
from school_admin.schemas import UserInDB, UserRole

from conftest import ADMIN_ID, SCHOOL_ID, login


def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers.get("X-Request-ID")


def test_login_returns_token_and_claims(client):
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "adminpass"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["tokenType"] == "bearer"
    assert body["token"]
    assert body["user"] == {
        "userId": ADMIN_ID,
        "email": "admin@example.com",
        "role": "admin",
        "schoolId": SCHOOL_ID,
        "name": "Admin User",
    }


def test_wrong_password_twice_looks_like_unknown_email(client):
    wrong = [
        client.post("/auth/login", json={"email": "admin@example.com", "password": "nope"})
        for _ in range(2)
    ]
    unknown = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
    for response in wrong + [unknown]:
        assert response.status_code == 401
    assert wrong[0].json() == wrong[1].json() == unknown.json()
    assert unknown.json()["message"] == "Invalid credentials"


@pytest.mark.parametrize("payload", [{}, {"email": "admin@example.com"}, {"password": "x"}])
def test_login_missing_fields_is_400(client, payload):
    response = client.post("/auth/login", json=payload)
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_login_invalid_json_is_400(client):
    response = client.post(
        "/auth/login", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


def test_register_teacher_into_existing_school(client):
    response = client.post("/auth/register", json={
        "email": "New.Teacher@Example.com",
        "password": "secret1",
        "name": "New Teacher",
        "role": "teacher",
        "tenantId": SCHOOL_ID,
    })
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully. Please login."
    assert body["user"]["email"] == "new.teacher@example.com"
    assert body["user"]["schoolId"] == SCHOOL_ID
    assert "passwordHash" not in body["user"]
    login(client, "new.teacher@example.com", "secret1")


def test_register_admin_with_new_school(client):
    response = client.post("/auth/register", json={
        "email": "boss@x.com",
        "password": "secret1",
        "name": "Boss",
        "role": "admin",
        "school": {"name": "X School", "address": "1 Road", "contactInfo": "555"},
    })
    assert response.status_code == 201
    school_id = response.json()["user"]["schoolId"]
    assert school_id and school_id != SCHOOL_ID

    headers = login(client, "boss@x.com", "secret1")
    school = client.get("/secure/admin/school", headers=headers).json()
    assert school == {"id": school_id, "name": "X School", "address": "1 Road", "contactInfo": "555"}


@pytest.mark.parametrize("payload, fragment", [
    ({"role": "student"}, "School ID is required"),
    ({"role": "teacher", "schoolId": "school404"}, "Invalid school ID"),
    ({"role": "teacher", "school": {"name": "T School", "address": "a", "contactInfo": "b"}}, "Only admins"),
    ({"role": "admin", "schoolId": SCHOOL_ID, "school": {"name": "Both", "address": "a", "contactInfo": "b"}}, "either"),
    ({"role": "teacher", "schoolId": SCHOOL_ID, "password": "123"}, None),
    ({"role": "janitor", "schoolId": SCHOOL_ID}, None),
])
def test_register_validation(client, payload, fragment):
    body = {"email": "someone@x.com", "password": "secret1", "name": "Someone", **payload}
    response = client.post("/auth/register", json=body)
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    if fragment:
        assert fragment in response.json()["message"]


def test_register_duplicate_email_is_409(client):
    response = client.post("/auth/register", json={
        "email": "STUDENT1@example.com",
        "password": "secret1",
        "name": "Copy",
        "role": "student",
        "schoolId": SCHOOL_ID,
    })
    assert response.status_code == 409
    assert response.json()["error_code"] == "CONFLICT"


def test_secure_paths_require_token(client):
    for path in ("/secure/me", "/secure/admin/teachers", "/secure/does-not-exist"):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json()["error_code"] == "MISSING_TOKEN"
        assert response.headers.get("X-Request-ID")


def test_non_bearer_scheme_is_missing_token(client, admin_headers):
    token = admin_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/secure/me", headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401
    assert response.json()["error_code"] == "MISSING_TOKEN"


def test_bearer_scheme_is_case_insensitive(client, admin_headers):
    token = admin_headers["Authorization"].split(" ", 1)[1]
    response = client.get("/secure/me", headers={"Authorization": f"bearer {token}"})
    assert response.status_code == 200


def test_malformed_token_rejected(client):
    response = client.get("/secure/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error_code"] == "TOKEN_MALFORMED"


def test_expired_token_rejected(client):
    admin = UserInDB(
        id=ADMIN_ID,
        email="admin@example.com",
        password_hash="unused",
        role=UserRole.ADMIN,
        name="Admin User",
        school_id=SCHOOL_ID,
    )
    token = issue_session(admin, expires_delta=timedelta(seconds=-30))
    response = client.get("/secure/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error_code"] == "TOKEN_EXPIRED"


def test_identity_headers_are_ignored(client, student_headers):
    spoofed = {**student_headers, "x-user-role": "admin", "x-school-id": SCHOOL_ID, "x-user-id": ADMIN_ID}
    response = client.get("/secure/admin/teachers", headers=spoofed)
    assert response.status_code == 403
    assert response.json()["error_code"] == "PERMISSION_DENIED"
