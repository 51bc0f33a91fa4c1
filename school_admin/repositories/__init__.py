from school_admin.core.config import Settings, settings as default_settings
from school_admin.core.logging import logger
from .base import (
    Storage,
    UserRepository,
    SchoolRepository,
    ClassRepository,
    GradeRepository,
    AttendanceRepository,
)
from .memory import MemoryStorage


def build_storage(config: Settings = default_settings) -> Storage:
    """Pick the storage backend named by STORAGE_BACKEND"""
    if config.STORAGE_BACKEND == "database":
        from .sql import SqlStorage
        from school_admin.core.database import create_engine

        logger.info("Using database storage backend")
        return SqlStorage(create_engine(config.DATABASE_URL, config.DATABASE_ECHO))

    logger.info("Using in-memory storage backend")
    return MemoryStorage()


__all__ = [
    'Storage',
    'UserRepository',
    'SchoolRepository',
    'ClassRepository',
    'GradeRepository',
    'AttendanceRepository',
    'MemoryStorage',
    'build_storage',
]
