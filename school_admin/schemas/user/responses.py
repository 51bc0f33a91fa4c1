# school_admin/schemas/user/responses.py
from typing import List, Optional
from pydantic import Field
from ..common.base import CamelModel
from ..enums import UserRole

class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    school_id: Optional[str] = None

class ProfileResponse(UserResponse):
    roll_number: Optional[str] = None
    class_ids: List[str] = Field(default_factory=list)
