from pydantic import Field
from typing import List, Optional

from ..common.base import CamelModel, NamedRef
from ..user.responses import UserResponse

class StudentResponse(UserResponse):
    roll_number: Optional[str] = None
    class_ids: List[str] = Field(default_factory=list)
    classes: List[NamedRef] = Field(default_factory=list)

class StudentMutationResponse(CamelModel):
    message: str
    student: StudentResponse
