# middleware/request_id.py
import time
import uuid
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from school_admin.core.errors import InternalError, get_error_message
from school_admin.core.logging import logger

class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id, writes one access log line for it and
    turns anything that escaped the routes into a generic 500.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ):
        request.state.request_id = str(uuid.uuid4())
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"Unhandled error on {request.method} {request.url.path}",
                exc_info=True,
                extra={"request_id": request.state.request_id}
            )
            body = get_error_message(InternalError())
            response = JSONResponse(status_code=body.pop("status_code"), content=body)

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers["X-Request-ID"] = request.state.request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request.state.request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration": duration_ms,
            }
        )
        return response
