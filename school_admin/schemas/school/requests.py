from pydantic import Field
from typing import Optional

from ..common.base import CamelModel

class SchoolUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_info: Optional[str] = Field(None, min_length=1, max_length=255)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Demo Public School",
                "address": "123 Education Lane, Kolkata",
                "contactInfo": "033-12345678"
            }
        }
    }

class ClassCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    teacher_id: str = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Class 10 - Section A",
                "teacherId": "user2"
            }
        }
    }

class ClassUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    teacher_id: Optional[str] = Field(None, min_length=1)
