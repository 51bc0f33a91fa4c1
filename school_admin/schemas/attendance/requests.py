# school_admin/schemas/attendance/requests.py
import datetime as dt
from pydantic import Field
from ..common.base import CamelModel
from ..enums import AttendanceStatus

class AttendanceRecordRequest(CamelModel):
    student_id: str = Field(..., min_length=1)
    date: dt.date = Field(..., description="Day of the record (YYYY-MM-DD)")
    status: AttendanceStatus

    model_config = {
        "json_schema_extra": {
            "example": {
                "studentId": "user3",
                "date": "2024-07-28",
                "status": "present"
            }
        }
    }
