from .auth import router as auth_router
from .admin import router as admin_router
from .roster import router as roster_router
from .profile import router as profile_router


__all__ = [
    "auth_router",
    "admin_router",
    "roster_router",
    "profile_router"
]
