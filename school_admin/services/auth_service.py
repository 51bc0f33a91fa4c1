from typing import Optional

from school_admin.core.errors import InvalidCredentialsException, ValidationError
from school_admin.core.logging import logger
from school_admin.core.security import (
    dummy_verify,
    get_password_hash,
    issue_session,
    verify_password
)
from school_admin.schemas import (
    LoginResponse,
    RegisterRequest,
    SessionClaims,
    UserInDB,
    UserResponse,
)
from .base_service import BaseService


class AuthService(BaseService):
    """Login and self-service registration"""

    async def authenticate_user(self, email: str, password: str) -> Optional[UserInDB]:
        user = await self.storage.users.get_by_email(self.normalize_email(email))
        if user is None:
            dummy_verify()
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def login(self, email: str, password: str) -> LoginResponse:
        user = await self.authenticate_user(email, password)
        if user is None:
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentialsException()

        token = issue_session(user)
        logger.info(f"User {user.id} logged in")
        return LoginResponse(token=token, user=SessionClaims.from_user(user))

    async def register(self, request: RegisterRequest) -> UserResponse:
        """
        Create an account. An admin may bring a new school along, in which
        case the school is created first and the admin is bound to it.
        Teachers and students must name an existing school.
        """
        email = self.normalize_email(request.email)

        async with self.storage.lock:
            await self._ensure_email_available(email)

            school_id = request.school_id
            if request.school is not None:
                school = await self.storage.schools.add(request.school.model_dump())
                school_id = school.id
                logger.info(f"School {school.id} registered")
            elif school_id:
                if await self.storage.schools.get(school_id) is None:
                    raise ValidationError(
                        "Invalid school ID",
                        details={"field": "schoolId"}
                    )

            user = await self.storage.users.add({
                "email": email,
                "password_hash": get_password_hash(request.password),
                "role": request.role,
                "name": request.name,
                "school_id": school_id,
            })

        logger.info(f"User {user.id} registered with role {user.role.value}")
        return UserResponse.model_validate(user)
