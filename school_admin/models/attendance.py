from sqlalchemy import Column, String, Date, Enum, UniqueConstraint
from .base import TenantModel
from school_admin.schemas.enums import AttendanceStatus

class Attendance(TenantModel):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint('student_id', 'class_id', 'date', 'school_id', name='uq_attendance_day'),
    )

    id = Column(String(64), primary_key=True)
    student_id = Column(String(64), nullable=False, index=True)
    class_id = Column(String(64), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(
        Enum(AttendanceStatus, values_callable=lambda statuses: [s.value for s in statuses]),
        nullable=False
    )

    def __repr__(self):
        return f"<Attendance(student_id={self.student_id}, date={self.date}, status={self.status})>"
