# base.py
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class TenantModel(Base):
    """
    A base mixin for multi-tenant architecture.
    This ensures models have a school_id foreign key.
    """
    __abstract__ = True

    school_id = Column(String(64), ForeignKey("schools.id"), nullable=False, index=True)
