from pydantic import EmailStr, Field
from typing import Optional

from school_admin.core.config import settings
from ..common.base import CamelModel

class TeacherCreateRequest(CamelModel):
    """Schema for an admin creating a teacher in their own school"""
    email: EmailStr
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "teacher1@example.com",
                "password": "teacherpass",
                "name": "Ms. Das"
            }
        }
    }

class TeacherUpdateRequest(CamelModel):
    """Schema for updating an existing teacher"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
