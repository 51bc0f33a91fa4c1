from pydantic import Field
from typing import Optional

from ..common.base import CamelModel

class SchoolResponse(CamelModel):
    id: str
    name: str
    address: str
    contact_info: str

class ClassResponse(CamelModel):
    id: str
    name: str
    teacher_id: str
    school_id: str
    # None when the referenced teacher no longer exists
    teacher_name: Optional[str] = None

class ClassMutationResponse(CamelModel):
    message: str
    class_: ClassResponse = Field(..., alias="class")
