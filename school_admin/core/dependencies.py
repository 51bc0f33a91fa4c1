from fastapi import Depends, Request

from school_admin.core.errors import MissingTokenError
from school_admin.repositories import Storage
from school_admin.schemas import SessionClaims
from school_admin.services import (
    AttendanceService,
    AuthService,
    ClassService,
    GradeService,
    ProfileService,
    SchoolService,
    StudentService,
    TeacherService,
)


def get_storage(request: Request) -> Storage:
    """Storage bundle attached to the application at startup"""
    return request.app.state.storage


# User authentication: claims come only from the auth middleware
async def get_current_claims(request: Request) -> SessionClaims:
    claims = getattr(request.state, "claims", None)
    if not isinstance(claims, SessionClaims):
        raise MissingTokenError("Not authenticated")
    return claims


# Service providers
async def get_auth_service(storage: Storage = Depends(get_storage)) -> AuthService:
    return AuthService(storage)

async def get_school_service(storage: Storage = Depends(get_storage)) -> SchoolService:
    return SchoolService(storage)

async def get_teacher_service(storage: Storage = Depends(get_storage)) -> TeacherService:
    return TeacherService(storage)

async def get_student_service(storage: Storage = Depends(get_storage)) -> StudentService:
    return StudentService(storage)

async def get_class_service(storage: Storage = Depends(get_storage)) -> ClassService:
    return ClassService(storage)

async def get_grade_service(storage: Storage = Depends(get_storage)) -> GradeService:
    return GradeService(storage)

async def get_attendance_service(storage: Storage = Depends(get_storage)) -> AttendanceService:
    return AttendanceService(storage)

async def get_profile_service(storage: Storage = Depends(get_storage)) -> ProfileService:
    return ProfileService(storage)
