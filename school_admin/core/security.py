# school_admin/core/security.py

from datetime import datetime, timedelta, timezone
import secrets
from typing import Any, Dict, Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from school_admin.core.config import settings, get_token_expires_delta
from school_admin.core.errors import (
    ExpiredTokenError,
    InvalidTokenError,
    MalformedTokenError
)
from school_admin.core.logging import logger
from school_admin.schemas.auth.tokens import SessionClaims

ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("sub", "email", "role", "name", "exp")

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.PASSWORD_HASH_ROUNDS
)

def get_password_hash(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against hash. A missing or unreadable hash never matches."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False

def dummy_verify() -> None:
    """Spend the time of a real verification when there is no account to check"""
    pwd_context.dummy_verify()

def issue_session(user, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed access token for a user record.

    Args:
        user: Any object exposing id, email, role, school_id and name
        expires_delta: Lifetime of the token; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT carrying the session claims
    """
    claims = SessionClaims.from_user(user)
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else get_token_expires_delta())

    to_encode = claims.to_token_payload()
    to_encode.update({
        "iat": now,
        "exp": expire,
        "iss": settings.TOKEN_ISSUER,
        "type": ACCESS_TOKEN_TYPE,
        "jti": secrets.token_urlsafe(16)
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def _decode(token: str) -> Dict[str, Any]:
    try:
        jwt.get_unverified_header(token)
        jwt.get_unverified_claims(token)
    except JWTError:
        raise MalformedTokenError()

    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=settings.TOKEN_ISSUER
        )
    except ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()

def verify_session(token: str) -> SessionClaims:
    """
    Verify a session token and return its claims.

    Raises:
        ExpiredTokenError: token is past its expiry
        MalformedTokenError: token cannot be parsed or lacks required claims
        InvalidTokenError: bad signature, wrong issuer or wrong token type
    """
    if not token or token.count(".") != 2:
        raise MalformedTokenError()

    payload = _decode(token)

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError("Invalid token type")

    if any(payload.get(claim) in (None, "") for claim in REQUIRED_CLAIMS):
        raise MalformedTokenError("Token is missing required claims")

    try:
        return SessionClaims.from_token_payload(payload)
    except (KeyError, ValueError):
        raise MalformedTokenError("Token is missing required claims")
