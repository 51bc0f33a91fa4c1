from ..common.base import CamelModel
from ..user.responses import UserResponse
from .tokens import SessionClaims

class LoginResponse(CamelModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: SessionClaims

class RegisterResponse(CamelModel):
    message: str = "User registered successfully. Please login."
    user: UserResponse
