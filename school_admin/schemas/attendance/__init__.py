from .base import AttendanceInDB
from .requests import AttendanceRecordRequest
from .responses import AttendanceResponse
