from .base import UserInDB
from .requests import ProfileUpdateRequest
from .responses import UserResponse, ProfileResponse
