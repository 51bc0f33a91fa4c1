# school_admin/schemas/user/requests.py
from pydantic import EmailStr, Field
from typing import Optional

from school_admin.core.config import settings
from ..common.base import CamelModel

class ProfileUpdateRequest(CamelModel):
    """Fields a user may change on their own account"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
