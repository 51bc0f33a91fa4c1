from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from .base import TenantModel

class Grade(TenantModel):
    """
    A score for one student in one subject of a class.
    (student_id, class_id, subject, term, school_id) identifies the record.
    """
    __tablename__ = "grades"

    id = Column(String(64), primary_key=True)
    student_id = Column(String(64), nullable=False, index=True)
    class_id = Column(String(64), nullable=False, index=True)
    subject = Column(String(100), nullable=False)
    # Number or letter grade
    score = Column(JSON, nullable=False)
    term = Column(String(50), nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Grade(student_id={self.student_id}, subject={self.subject}, score={self.score})>"
