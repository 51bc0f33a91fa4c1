# school_admin/schemas/user/base.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from ..enums import UserRole

class UserInDB(BaseModel):
    """User record as held by the identity store. Never returned to clients."""
    id: str
    email: str
    password_hash: str
    role: UserRole
    name: str
    school_id: Optional[str] = None
    roll_number: Optional[str] = None
    class_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
