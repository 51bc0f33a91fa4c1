from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.sql import func
from .base import Base
from school_admin.schemas.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False
    )
    name = Column(String(100), nullable=False)

    # Admins may exist before their school does
    school_id = Column(String(64), ForeignKey("schools.id"), nullable=True, index=True)

    # Student-only fields
    roll_number = Column(String(50), nullable=True)
    class_ids = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name}, role={self.role})>"
