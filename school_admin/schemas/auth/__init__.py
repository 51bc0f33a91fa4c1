from .tokens import SessionClaims
from .responses import RegisterResponse, LoginResponse
from .requests import RegisterRequest, LoginRequest, NewSchoolRequest
