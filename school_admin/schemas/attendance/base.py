# school_admin/schemas/attendance/base.py
import datetime as dt
from pydantic import BaseModel, ConfigDict
from ..enums import AttendanceStatus

class AttendanceInDB(BaseModel):
    id: str
    student_id: str
    class_id: str
    date: dt.date
    status: AttendanceStatus
    school_id: str

    model_config = ConfigDict(from_attributes=True)
