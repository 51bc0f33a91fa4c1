from .base import SchoolInDB, ClassInDB
from .requests import SchoolUpdateRequest, ClassCreateRequest, ClassUpdateRequest
from .responses import SchoolResponse, ClassResponse, ClassMutationResponse
