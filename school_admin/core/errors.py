from typing import Any, Dict, Optional, Union
from fastapi import status
from starlette.exceptions import HTTPException as StarletteHTTPException


class BaseAPIError(Exception):
    """Base exception class for API errors"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

class ValidationError(BaseAPIError):
    """Raised when input is missing, malformed or references unknown records"""
    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details=details
        )

class AuthenticationError(BaseAPIError):
    """Base class for authentication-related errors"""
    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: str = "AUTH_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=error_code,
            details=details
        )

class InvalidCredentialsException(AuthenticationError):
    """Raised when user credentials are invalid"""
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message, error_code="INVALID_CREDENTIALS")

class MissingTokenError(AuthenticationError):
    """Raised when a protected request carries no bearer token"""
    def __init__(self, message: str = "Authentication token missing"):
        super().__init__(message=message, error_code="MISSING_TOKEN")

class InvalidTokenError(AuthenticationError):
    """Raised when a token signature, issuer or type does not check out"""
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message=message, error_code="TOKEN_INVALID")

class ExpiredTokenError(AuthenticationError):
    """Raised when a token is past its expiry"""
    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, error_code="TOKEN_EXPIRED")

class MalformedTokenError(AuthenticationError):
    """Raised when a token cannot be parsed or lacks required claims"""
    def __init__(self, message: str = "Malformed token"):
        super().__init__(message=message, error_code="TOKEN_MALFORMED")

class PermissionDenied(BaseAPIError):
    """Raised when user doesn't have required permissions"""
    def __init__(
        self,
        message: str = "Permission denied",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="PERMISSION_DENIED",
            details=details
        )

class NotFoundError(BaseAPIError):
    """Raised when a requested resource is not found"""
    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details
        )

class ConflictError(BaseAPIError):
    """Raised when a unique value (e.g. email) is already taken"""
    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT",
            details=details
        )

class InternalError(BaseAPIError):
    """Raised for unexpected failures; never carries internal detail"""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message=message)


def get_error_message(
    error: Union[Exception, StarletteHTTPException, str],
    default_message: str = "Internal server error",
    include_details: bool = True
) -> Dict[str, Any]:
    """
    Formats an error into the response body shared by every endpoint.

    Args:
        error: The exception that was raised or an error message string
        default_message: Message used when the error type is not recognized
        include_details: Whether to include structured error details

    Returns:
        Dict containing success flag, error code, message, status code and
        optional details. Unknown exceptions never leak their text.
    """
    error_response = {
        "success": False,
        "error_code": "INTERNAL_ERROR",
        "message": default_message,
        "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
    }

    if isinstance(error, str):
        error_response.update({
            "message": error,
            "error_code": "GENERAL_ERROR"
        })
        return error_response

    if isinstance(error, BaseAPIError):
        error_response.update({
            "error_code": error.error_code,
            "message": error.message,
            "status_code": error.status_code
        })
        if include_details and error.details:
            error_response["details"] = error.details

    elif isinstance(error, StarletteHTTPException):
        error_response.update({
            "error_code": "HTTP_ERROR",
            "message": str(error.detail),
            "status_code": error.status_code
        })

    return error_response
