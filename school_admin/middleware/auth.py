from typing import Optional
from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from school_admin.core.config import settings
from school_admin.core.errors import AuthenticationError, MissingTokenError, get_error_message
from school_admin.core.logging import logger
from school_admin.core.security import verify_session


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Guards every path under the secure prefix. A request either carries a
    valid bearer token, and leaves with its claims on request.state, or is
    answered with 401 here and never reaches a route.
    """

    def __init__(self, app, secure_prefix: Optional[str] = None):
        super().__init__(app)
        self.secure_prefix = secure_prefix or settings.SECURE_PATH_PREFIX

    def _is_protected(self, request: Request) -> bool:
        path = request.url.path
        return path.startswith(self.secure_prefix) or path == self.secure_prefix.rstrip("/")

    @staticmethod
    def _extract_token(request: Request) -> Optional[str]:
        """Extract token from the Authorization header"""
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    @staticmethod
    def _reject(error: AuthenticationError) -> JSONResponse:
        body = get_error_message(error)
        status_code = body.pop("status_code")
        return JSONResponse(
            status_code=status_code,
            content=body,
            headers={"WWW-Authenticate": "Bearer"}
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request and handle authentication"""

        # Skip middleware for public paths and CORS preflight
        if request.method == "OPTIONS" or not self._is_protected(request):
            return await call_next(request)

        # Never trust claims that did not come from this middleware
        request.state.claims = None

        token = self._extract_token(request)
        if not token:
            logger.warning(
                "Authentication failed: missing token",
                extra={"request_id": getattr(request.state, "request_id", None)}
            )
            return self._reject(MissingTokenError())

        try:
            request.state.claims = verify_session(token)
        except AuthenticationError as auth_err:
            logger.warning(
                f"Authentication failed: {auth_err.error_code}",
                extra={"request_id": getattr(request.state, "request_id", None)}
            )
            return self._reject(auth_err)

        return await call_next(request)
