# school_admin/schemas/__init__.py

# Import enums
from .enums import UserRole, AttendanceStatus

# Import common schemas
from .common.base import CamelModel, NamedRef
from .common.error import ErrorResponse, MessageResponse

# Import auth schemas
from .auth.tokens import SessionClaims
from .auth.requests import LoginRequest, RegisterRequest, NewSchoolRequest
from .auth.responses import LoginResponse, RegisterResponse

# Import user schemas
from .user.base import UserInDB
from .user.requests import ProfileUpdateRequest
from .user.responses import UserResponse, ProfileResponse

# Import teacher schemas
from .teacher.requests import TeacherCreateRequest, TeacherUpdateRequest
from .teacher.responses import TeacherResponse, TeacherMutationResponse

# Import student schemas
from .student.requests import StudentCreateRequest, StudentUpdateRequest
from .student.responses import StudentResponse, StudentMutationResponse

# Import school and class schemas
from .school.base import SchoolInDB, ClassInDB
from .school.requests import SchoolUpdateRequest, ClassCreateRequest, ClassUpdateRequest
from .school.responses import SchoolResponse, ClassResponse, ClassMutationResponse

# Import grade and attendance schemas
from .grade.base import GradeInDB, Score
from .grade.requests import GradeRecordRequest
from .grade.responses import GradeResponse
from .attendance.base import AttendanceInDB
from .attendance.requests import AttendanceRecordRequest
from .attendance.responses import AttendanceResponse

__all__ = [
    'UserRole', 'AttendanceStatus',
    'CamelModel', 'NamedRef', 'ErrorResponse', 'MessageResponse',
    'SessionClaims', 'LoginRequest', 'RegisterRequest', 'NewSchoolRequest',
    'LoginResponse', 'RegisterResponse',
    'UserInDB', 'ProfileUpdateRequest', 'UserResponse', 'ProfileResponse',
    'TeacherCreateRequest', 'TeacherUpdateRequest', 'TeacherResponse', 'TeacherMutationResponse',
    'StudentCreateRequest', 'StudentUpdateRequest', 'StudentResponse', 'StudentMutationResponse',
    'SchoolInDB', 'ClassInDB', 'SchoolUpdateRequest', 'ClassCreateRequest', 'ClassUpdateRequest',
    'SchoolResponse', 'ClassResponse', 'ClassMutationResponse',
    'GradeInDB', 'Score', 'GradeRecordRequest', 'GradeResponse',
    'AttendanceInDB', 'AttendanceRecordRequest', 'AttendanceResponse',
]
