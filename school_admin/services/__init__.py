from .base_service import BaseService
from .auth_service import AuthService
from .school_service import SchoolService
from .teacher_service import TeacherService
from .student_service import StudentService
from .class_service import ClassService
from .grade_service import GradeService
from .attendance_service import AttendanceService
from .profile_service import ProfileService

__all__ = [
    "BaseService",
    "AuthService",
    "SchoolService",
    "TeacherService",
    "StudentService",
    "ClassService",
    "GradeService",
    "AttendanceService",
    "ProfileService"
]
