import datetime as dt
from typing import List, Optional

from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource
from school_admin.schemas import AttendanceRecordRequest, AttendanceResponse, SessionClaims
from .base_service import BaseService


class AttendanceService(BaseService):

    async def list_class_attendance(
        self,
        actor: SessionClaims,
        class_id: str,
        on_date: Optional[dt.date] = None
    ) -> List[AttendanceResponse]:
        class_ = await self._load_class(actor, Action.READ, Resource.ATTENDANCE, class_id)
        records = await self.storage.attendance.list(class_.school_id, class_id=class_id, on_date=on_date)
        return [AttendanceResponse.model_validate(record) for record in records]

    async def record_attendance(
        self,
        actor: SessionClaims,
        class_id: str,
        request: AttendanceRecordRequest
    ) -> AttendanceResponse:
        """Insert or overwrite the attendance for (student, class, date)"""
        async with self.storage.lock:
            class_ = await self._load_class(actor, Action.UPDATE, Resource.ATTENDANCE, class_id)
            await self._validate_enrolment(request.student_id, class_)
            record = await self.storage.attendance.upsert({
                "student_id": request.student_id,
                "class_id": class_.id,
                "date": request.date,
                "status": request.status,
                "school_id": class_.school_id,
            })

        logger.info(f"Attendance {record.id} recorded for class {class_id} on {record.date.isoformat()}")
        return AttendanceResponse.model_validate(record)

    async def list_student_attendance(
        self,
        actor: SessionClaims,
        student_id: str,
        class_id: Optional[str] = None
    ) -> List[AttendanceResponse]:
        student = await self._load_record_owner(actor, Resource.ATTENDANCE, student_id)
        records = await self.storage.attendance.list(
            student.school_id, student_id=student.id, class_id=class_id
        )
        return [AttendanceResponse.model_validate(record) for record in records]
