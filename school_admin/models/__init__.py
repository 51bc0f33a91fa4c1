from .base import Base, TenantModel
from .school import School
from .user import User
from .class_ import Class
from .grade import Grade
from .attendance import Attendance

__all__ = [
    'Base',
    'TenantModel',
    'School',
    'User',
    'Class',
    'Grade',
    'Attendance'
]
