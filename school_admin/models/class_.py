from sqlalchemy import Column, String
from .base import TenantModel

class Class(TenantModel):
    __tablename__ = "classes"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)  # e.g., "Class 10 - Section A"
    # Not a foreign key: deleting a teacher leaves the class in place
    teacher_id = Column(String(64), nullable=False, index=True)

    def __repr__(self):
        return f"<Class(id={self.id}, name={self.name}, school_id={self.school_id})>"
