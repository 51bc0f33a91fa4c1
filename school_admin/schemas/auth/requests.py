from pydantic import AliasChoices, EmailStr, Field, model_validator
from typing import Optional

from school_admin.core.config import settings
from ..common.base import CamelModel
from ..enums import UserRole

# Login Request Model - email is not format-checked so unknown and malformed
# addresses fail the same way
class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)

# School details supplied by an admin registering a new tenant
class NewSchoolRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    contact_info: str = Field(..., min_length=1, max_length=255)

# Register Request Model - self-service account creation
class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole
    school_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tenantId", "schoolId", "school_id")
    )
    school: Optional[NewSchoolRequest] = None

    @model_validator(mode='after')
    def validate_school_binding(self) -> 'RegisterRequest':
        if self.school is not None:
            if self.role != UserRole.ADMIN:
                raise ValueError("Only admins can register a new school")
            if self.school_id:
                raise ValueError("Provide either schoolId or school, not both")
        elif self.role != UserRole.ADMIN and not self.school_id:
            raise ValueError("School ID is required for teachers and students")
        return self

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "principal@example.com",
                "password": "s3cret!",
                "name": "Principal Admin",
                "role": "admin",
                "school": {
                    "name": "Demo Public School",
                    "address": "123 Education Lane, Kolkata",
                    "contactInfo": "033-12345678"
                }
            }
        }
    }
