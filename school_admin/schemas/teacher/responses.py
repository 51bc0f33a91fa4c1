from ..common.base import CamelModel
from ..user.responses import UserResponse

class TeacherResponse(UserResponse):
    pass

class TeacherMutationResponse(CamelModel):
    message: str
    teacher: TeacherResponse
