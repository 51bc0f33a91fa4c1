"""Error bodies share one shape and never leak internals."""
from fastapi.testclient import TestClient

from school_admin.core.errors import ConflictError, NotFoundError, get_error_message

from conftest import ADMIN_LOGIN, login


def test_error_body_shape():
    body = get_error_message(ConflictError("User already exists with this email"))
    assert body == {
        "success": False,
        "error_code": "CONFLICT",
        "message": "User already exists with this email",
        "status_code": 409,
    }

    body = get_error_message(NotFoundError("Class not found", details={"id": "class9"}))
    assert body["details"] == {"id": "class9"}


def test_unknown_exceptions_are_generic():
    body = get_error_message(RuntimeError("connection string with password"))
    assert body["status_code"] == 500
    assert body["error_code"] == "INTERNAL_ERROR"
    assert "password" not in body["message"]


def test_unhandled_error_becomes_500(app, storage, monkeypatch):
    async def broken(school_id):
        raise RuntimeError("storage exploded")

    with TestClient(app, raise_server_exceptions=False) as client:
        headers = login(client, *ADMIN_LOGIN)
        monkeypatch.setattr(storage.schools, "get", broken)

        response = client.get("/secure/admin/school", headers=headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error_code": "INTERNAL_ERROR",
        "message": "Internal server error",
    }
    assert response.headers.get("X-Request-ID")


def test_unknown_route_is_404(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["error_code"] == "HTTP_ERROR"


def test_wrong_method_is_405(client):
    response = client.get("/auth/login")
    assert response.status_code == 405
    assert response.json()["error_code"] == "HTTP_ERROR"
