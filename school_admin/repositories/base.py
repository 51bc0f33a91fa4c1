"""
Repository interfaces shared by the storage backends.

Services only ever talk to these interfaces, reached through a ``Storage``
bundle, so the in-memory and SQL backends are interchangeable.
"""

import asyncio
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from school_admin.schemas import (
    AttendanceInDB,
    ClassInDB,
    GradeInDB,
    SchoolInDB,
    UserInDB,
    UserRole,
)


class UserRepository(Protocol):
    async def get(self, user_id: str) -> Optional[UserInDB]: ...

    async def get_by_email(self, email: str) -> Optional[UserInDB]: ...

    async def list(
        self, school_id: Optional[str] = None, role: Optional[UserRole] = None
    ) -> List[UserInDB]: ...

    async def add(self, data: Dict[str, Any]) -> UserInDB: ...

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserInDB]: ...

    async def delete(self, user_id: str) -> bool: ...

    async def remove_class_from_students(self, class_id: str, school_id: str) -> int: ...


class SchoolRepository(Protocol):
    async def get(self, school_id: str) -> Optional[SchoolInDB]: ...

    async def list(self) -> List[SchoolInDB]: ...

    async def add(self, data: Dict[str, Any]) -> SchoolInDB: ...

    async def update(self, school_id: str, changes: Dict[str, Any]) -> Optional[SchoolInDB]: ...


class ClassRepository(Protocol):
    async def get(self, class_id: str) -> Optional[ClassInDB]: ...

    async def list(self, school_id: str, teacher_id: Optional[str] = None) -> List[ClassInDB]: ...

    async def add(self, data: Dict[str, Any]) -> ClassInDB: ...

    async def update(self, class_id: str, changes: Dict[str, Any]) -> Optional[ClassInDB]: ...

    async def delete(self, class_id: str) -> bool: ...


class GradeRepository(Protocol):
    async def upsert(self, data: Dict[str, Any]) -> GradeInDB: ...

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> List[GradeInDB]: ...


class AttendanceRepository(Protocol):
    async def upsert(self, data: Dict[str, Any]) -> AttendanceInDB: ...

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        on_date: Optional[dt.date] = None,
    ) -> List[AttendanceInDB]: ...


GRADE_KEY = ("student_id", "class_id", "subject", "term", "school_id")
ATTENDANCE_KEY = ("student_id", "class_id", "date", "school_id")


@dataclass
class Storage:
    """
    Every store the service needs, plus the lock that serializes
    check-then-write sequences inside one process.
    """
    users: UserRepository
    schools: SchoolRepository
    classes: ClassRepository
    grades: GradeRepository
    attendance: AttendanceRepository
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def startup(self) -> None:
        """Prepare the backend before the first request"""

    async def shutdown(self) -> None:
        """Release backend resources"""

    async def is_empty(self) -> bool:
        return not await self.schools.list() and not await self.users.list()
