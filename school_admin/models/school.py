from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from .base import Base


class School(Base):
    """
    A school is the tenant: the root of the data isolation hierarchy.
    Schools are created by registration or the demo seed and never deleted.
    """
    __tablename__ = "schools"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    contact_info = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<School(id={self.id}, name={self.name})>"
