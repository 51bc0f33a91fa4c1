from pydantic import EmailStr, Field
from typing import List, Optional

from school_admin.core.config import settings
from ..common.base import CamelModel


class StudentCreateRequest(CamelModel):
    email: EmailStr = Field(..., description="Login email of the student")
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=100, description="Full name of the student")
    roll_number: str = Field(..., min_length=1, max_length=50, description="Roll number within the school")
    class_ids: List[str] = Field(default_factory=list, description="Classes the student attends")

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "student1@example.com",
                "password": "studentpass",
                "name": "Rohan Sharma",
                "rollNumber": "S1001",
                "classIds": ["class1"]
            }
        }
    }

class StudentUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
    roll_number: Optional[str] = Field(None, min_length=1, max_length=50)
    class_ids: Optional[List[str]] = None
