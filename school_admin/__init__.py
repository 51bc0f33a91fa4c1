#school_admin/__init__.py
import datetime as dt
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import BaseAPIError, ValidationError, get_error_message
from .core.logging import logger
from .core.security import get_password_hash
from .middleware.auth import AuthMiddleware
from .middleware.request_id import RequestIDMiddleware
from .repositories import Storage, build_storage
from .routes import admin_router, auth_router, profile_router, roster_router
from .schemas import AttendanceStatus, ErrorResponse, UserRole


def _error_response(error: Exception) -> JSONResponse:
    body = get_error_message(error)
    status_code = body.pop("status_code")
    return JSONResponse(status_code=status_code, content=body)


def _validation_details(exc: RequestValidationError) -> dict:
    """Name the offending fields without echoing what was sent"""
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append({
            "field": ".".join(location) or "body",
            "message": str(error.get("msg", "Invalid value")).removeprefix("Value error, "),
        })
    return {"fields": fields}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BaseAPIError)
    async def api_error_handler(request: Request, exc: BaseAPIError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        message = details["fields"][0]["message"] if details["fields"] else "Validation error"
        return _error_response(ValidationError(message, details=details))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return _error_response(exc)


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-tenant school administration API",
        version=settings.VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.storage = storage if storage is not None else build_storage(settings)

    # Added innermost first: auth runs inside request-id, CORS wraps both
    app.add_middleware(AuthMiddleware, secure_prefix=settings.SECURE_PATH_PREFIX)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    # Include routers
    secure = settings.SECURE_PATH_PREFIX.rstrip("/")
    error_responses = {
        code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)
    }
    app.include_router(auth_router, prefix="/auth", tags=["Authentication"],
                       responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}})
    app.include_router(admin_router, prefix=f"{secure}/admin", tags=["Admin"], responses=error_responses)
    app.include_router(roster_router, prefix=secure, tags=["Roster"], responses=error_responses)
    app.include_router(profile_router, prefix=secure, tags=["Users"], responses=error_responses)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "app": settings.APP_NAME, "version": settings.VERSION}

    @app.on_event("startup")
    async def startup_event():
        await app.state.storage.startup()
        if settings.SEED_DEMO_DATA:
            await seed_demo_data(app.state.storage)
        logger.info("Application startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.storage.shutdown()
        logger.info("Application shutdown completed")

    return app


async def seed_demo_data(storage: Storage) -> bool:
    """
    Load the demo school into an empty store. Returns False and leaves the
    store alone when it already holds data.
    """
    async with storage.lock:
        if not await storage.is_empty():
            logger.info("Storage already populated, demo seed skipped")
            return False

        school = await storage.schools.add({
            "name": "Demo Public School",
            "address": "123 Education Lane, Kolkata",
            "contact_info": "033-12345678",
        })
        await storage.users.add({
            "email": "admin@example.com",
            "password_hash": get_password_hash("adminpass"),
            "role": UserRole.ADMIN,
            "name": "Admin User",
            "school_id": school.id,
        })
        teacher = await storage.users.add({
            "email": "teacher1@example.com",
            "password_hash": get_password_hash("teacherpass"),
            "role": UserRole.TEACHER,
            "name": "Teacher One",
            "school_id": school.id,
        })
        class_a = await storage.classes.add({
            "name": "Class 10 - Section A",
            "teacher_id": teacher.id,
            "school_id": school.id,
        })
        class_b = await storage.classes.add({
            "name": "Class 9 - Section B",
            "teacher_id": teacher.id,
            "school_id": school.id,
        })
        student = await storage.users.add({
            "email": "student1@example.com",
            "password_hash": get_password_hash("studentpass"),
            "role": UserRole.STUDENT,
            "name": "Student One",
            "school_id": school.id,
            "roll_number": "S1001",
            "class_ids": [class_a.id, class_b.id],
        })
        await storage.attendance.upsert({
            "student_id": student.id,
            "class_id": class_a.id,
            "date": dt.date(2024, 7, 28),
            "status": AttendanceStatus.PRESENT,
            "school_id": school.id,
        })
        for subject, score in (("Mathematics", "A+"), ("Physics", 85)):
            await storage.grades.upsert({
                "student_id": student.id,
                "class_id": class_a.id,
                "subject": subject,
                "score": score,
                "term": "Midterm",
                "school_id": school.id,
            })

    logger.info(f"Demo data seeded into school {school.id}")
    return True
