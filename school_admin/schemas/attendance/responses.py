# school_admin/schemas/attendance/responses.py
import datetime as dt
from ..common.base import CamelModel
from ..enums import AttendanceStatus

class AttendanceResponse(CamelModel):
    id: str
    student_id: str
    class_id: str
    date: dt.date
    status: AttendanceStatus
    school_id: str
