from .requests import TeacherCreateRequest, TeacherUpdateRequest
from .responses import TeacherResponse, TeacherMutationResponse
