from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from school_admin.core.config import settings
from school_admin.core.errors import ExpiredTokenError, InvalidTokenError, MalformedTokenError
from school_admin.core.security import (
    get_password_hash,
    issue_session,
    verify_password,
    verify_session,
)
from school_admin.schemas import UserInDB, UserRole


@pytest.fixture
def teacher():
    return UserInDB(
        id="user2",
        email="teacher1@example.com",
        password_hash=get_password_hash("teacherpass"),
        role=UserRole.TEACHER,
        name="Teacher One",
        school_id="school1",
    )


def _signed(payload: dict, key: str = None) -> str:
    return jwt.encode(payload, key or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _base_payload(**overrides) -> dict:
    payload = {
        "sub": "user2",
        "email": "teacher1@example.com",
        "role": "teacher",
        "school_id": "school1",
        "name": "Teacher One",
        "iss": settings.TOKEN_ISSUER,
        "type": "access",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    payload.update(overrides)
    return payload


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


@pytest.mark.parametrize("stored", ["", None, "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_password_never_raises_on_bad_hash(stored):
    assert verify_password("anything", stored) is False


def test_issued_session_verifies_to_same_claims(teacher):
    claims = verify_session(issue_session(teacher))
    assert claims.user_id == "user2"
    assert claims.email == "teacher1@example.com"
    assert claims.role is UserRole.TEACHER
    assert claims.school_id == "school1"
    assert claims.name == "Teacher One"


def test_token_carries_expiry_issuer_and_type(teacher):
    payload = jwt.get_unverified_claims(issue_session(teacher))
    assert payload["iss"] == settings.TOKEN_ISSUER
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert "password_hash" not in payload


def test_expired_token_rejected(teacher):
    token = issue_session(teacher, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ExpiredTokenError):
        verify_session(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "only.two"])
def test_malformed_token_rejected(token):
    with pytest.raises(MalformedTokenError):
        verify_session(token)


def test_foreign_signature_rejected():
    with pytest.raises(InvalidTokenError):
        verify_session(_signed(_base_payload(), key="some-other-secret"))


def test_wrong_issuer_rejected():
    with pytest.raises(InvalidTokenError):
        verify_session(_signed(_base_payload(iss="someone-else")))


def test_wrong_token_type_rejected():
    with pytest.raises(InvalidTokenError):
        verify_session(_signed(_base_payload(type="refresh")))


def test_missing_claims_rejected():
    payload = _base_payload()
    del payload["email"]
    with pytest.raises(MalformedTokenError):
        verify_session(_signed(payload))


def test_errors_are_all_401():
    for error in (ExpiredTokenError(), InvalidTokenError(), MalformedTokenError()):
        assert error.status_code == 401
