from .requests import StudentCreateRequest, StudentUpdateRequest
from .responses import StudentResponse, StudentMutationResponse
