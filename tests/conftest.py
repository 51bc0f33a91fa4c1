"""
Pytest configuration and shared fixtures.

Settings are read once at import time, so the environment is prepared
before anything from school_admin is imported.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from school_admin import create_app
from school_admin.repositories import MemoryStorage
from school_admin.schemas import SessionClaims, UserRole

# Ids handed out by the demo seed in an empty MemoryStorage
SCHOOL_ID = "school1"
ADMIN_ID = "user1"
TEACHER_ID = "user2"
STUDENT_ID = "user3"
CLASS_A = "class1"
CLASS_B = "class2"

ADMIN_LOGIN = ("admin@example.com", "adminpass")
TEACHER_LOGIN = ("teacher1@example.com", "teacherpass")
STUDENT_LOGIN = ("student1@example.com", "studentpass")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def app(storage):
    return create_app(storage=storage)


@pytest.fixture
def client(app):
    # Entering the context runs startup, which seeds the demo school
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, email: str, password: str) -> dict:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, *ADMIN_LOGIN)


@pytest.fixture
def teacher_headers(client):
    return login(client, *TEACHER_LOGIN)


@pytest.fixture
def student_headers(client):
    return login(client, *STUDENT_LOGIN)


def make_claims(
    user_id: str = ADMIN_ID,
    role: UserRole = UserRole.ADMIN,
    school_id: str = SCHOOL_ID,
    name: str = "Test User",
) -> SessionClaims:
    return SessionClaims(
        user_id=user_id,
        email=f"{user_id}@example.com",
        role=role,
        school_id=school_id,
        name=name,
    )
