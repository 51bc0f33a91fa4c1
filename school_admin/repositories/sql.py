"""
SQLAlchemy storage backend. Each repository call runs in its own session
and commits before returning; rows are converted to the schema models so
no ORM object escapes the repository.
"""

import datetime as dt
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from school_admin.core.database import (
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from school_admin.core.logging import logger
from school_admin.models import Attendance, Class, Grade, School, User
from school_admin.schemas import (
    AttendanceInDB,
    ClassInDB,
    GradeInDB,
    SchoolInDB,
    UserInDB,
    UserRole,
)
from .base import Storage


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


class SqlRepository:
    """Shared plumbing: the session factory and a row-to-schema converter."""
    model = None
    schema = None

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    def _to_schema(self, row):
        return self.schema.model_validate(row) if row is not None else None

    async def _get(self, row_id: str):
        async with session_scope(self.session_factory) as session:
            return self._to_schema(await session.get(self.model, row_id))

    async def _add(self, prefix: str, data: Dict[str, Any]):
        async with session_scope(self.session_factory) as session:
            row = self.model(id=new_id(prefix), **data)
            session.add(row)
            await session.flush()
            logger.debug(f"Created {self.model.__name__}: {row.id}")
            return self._to_schema(row)

    async def _update(self, row_id: str, changes: Dict[str, Any]):
        async with session_scope(self.session_factory) as session:
            row = await session.get(self.model, row_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            await session.flush()
            return self._to_schema(row)

    async def _delete(self, row_id: str) -> bool:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(delete(self.model).where(self.model.id == row_id))
            return result.rowcount > 0

    async def _select(self, stmt) -> list:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(stmt)
            return [self._to_schema(row) for row in result.scalars().all()]


class SqlUserRepository(SqlRepository):
    model = User
    schema = UserInDB

    async def get(self, user_id: str) -> Optional[UserInDB]:
        return await self._get(user_id)

    async def get_by_email(self, email: str) -> Optional[UserInDB]:
        rows = await self._select(select(User).where(User.email == email.strip().lower()))
        return rows[0] if rows else None

    async def list(
        self, school_id: Optional[str] = None, role: Optional[UserRole] = None
    ) -> List[UserInDB]:
        stmt = select(User).order_by(User.created_at, User.id)
        if school_id is not None:
            stmt = stmt.where(User.school_id == school_id)
        if role is not None:
            stmt = stmt.where(User.role == role)
        return await self._select(stmt)

    async def add(self, data: Dict[str, Any]) -> UserInDB:
        data = {**data, "class_ids": list(data.get("class_ids") or [])}
        return await self._add("user", data)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserInDB]:
        if "class_ids" in changes:
            # JSON columns are only flushed when reassigned
            changes = {**changes, "class_ids": list(changes["class_ids"])}
        return await self._update(user_id, changes)

    async def delete(self, user_id: str) -> bool:
        return await self._delete(user_id)

    async def remove_class_from_students(self, class_id: str, school_id: str) -> int:
        async with session_scope(self.session_factory) as session:
            result = await session.execute(
                select(User).where(User.school_id == school_id, User.role == UserRole.STUDENT)
            )
            pruned = 0
            for student in result.scalars().all():
                if class_id in (student.class_ids or []):
                    student.class_ids = [cid for cid in student.class_ids if cid != class_id]
                    pruned += 1
            return pruned


class SqlSchoolRepository(SqlRepository):
    model = School
    schema = SchoolInDB

    async def get(self, school_id: str) -> Optional[SchoolInDB]:
        return await self._get(school_id)

    async def list(self) -> List[SchoolInDB]:
        return await self._select(select(School).order_by(School.created_at, School.id))

    async def add(self, data: Dict[str, Any]) -> SchoolInDB:
        return await self._add("school", data)

    async def update(self, school_id: str, changes: Dict[str, Any]) -> Optional[SchoolInDB]:
        return await self._update(school_id, changes)


class SqlClassRepository(SqlRepository):
    model = Class
    schema = ClassInDB

    async def get(self, class_id: str) -> Optional[ClassInDB]:
        return await self._get(class_id)

    async def list(self, school_id: str, teacher_id: Optional[str] = None) -> List[ClassInDB]:
        stmt = select(Class).where(Class.school_id == school_id).order_by(Class.name, Class.id)
        if teacher_id is not None:
            stmt = stmt.where(Class.teacher_id == teacher_id)
        return await self._select(stmt)

    async def add(self, data: Dict[str, Any]) -> ClassInDB:
        return await self._add("class", data)

    async def update(self, class_id: str, changes: Dict[str, Any]) -> Optional[ClassInDB]:
        return await self._update(class_id, changes)

    async def delete(self, class_id: str) -> bool:
        return await self._delete(class_id)


class SqlGradeRepository(SqlRepository):
    model = Grade
    schema = GradeInDB

    async def upsert(self, data: Dict[str, Any]) -> GradeInDB:
        term = data.get("term")
        async with session_scope(self.session_factory) as session:
            stmt = select(Grade).where(
                Grade.student_id == data["student_id"],
                Grade.class_id == data["class_id"],
                Grade.subject == data["subject"],
                Grade.school_id == data["school_id"],
                Grade.term.is_(None) if term is None else Grade.term == term,
            )
            row = (await session.execute(stmt)).scalars().first()
            if row is None:
                row = Grade(id=new_id("grade"), **{**data, "term": term})
                session.add(row)
            else:
                row.score = data["score"]
            await session.flush()
            return self._to_schema(row)

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> List[GradeInDB]:
        stmt = select(Grade).where(Grade.school_id == school_id)
        if student_id is not None:
            stmt = stmt.where(Grade.student_id == student_id)
        if class_id is not None:
            stmt = stmt.where(Grade.class_id == class_id)
        if subject is not None:
            stmt = stmt.where(Grade.subject == subject)
        return await self._select(stmt.order_by(Grade.subject, Grade.id))


class SqlAttendanceRepository(SqlRepository):
    model = Attendance
    schema = AttendanceInDB

    async def upsert(self, data: Dict[str, Any]) -> AttendanceInDB:
        async with session_scope(self.session_factory) as session:
            stmt = select(Attendance).where(
                Attendance.student_id == data["student_id"],
                Attendance.class_id == data["class_id"],
                Attendance.date == data["date"],
                Attendance.school_id == data["school_id"],
            )
            row = (await session.execute(stmt)).scalars().first()
            if row is None:
                row = Attendance(id=new_id("att"), **data)
                session.add(row)
            else:
                row.status = data["status"]
            await session.flush()
            return self._to_schema(row)

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        on_date: Optional[dt.date] = None,
    ) -> List[AttendanceInDB]:
        stmt = select(Attendance).where(Attendance.school_id == school_id)
        if student_id is not None:
            stmt = stmt.where(Attendance.student_id == student_id)
        if class_id is not None:
            stmt = stmt.where(Attendance.class_id == class_id)
        if on_date is not None:
            stmt = stmt.where(Attendance.date == on_date)
        return await self._select(stmt.order_by(Attendance.date, Attendance.id))


class SqlStorage(Storage):
    def __init__(self, engine: Optional[AsyncEngine] = None):
        self.engine = engine or create_engine()
        session_factory = create_session_factory(self.engine)
        super().__init__(
            users=SqlUserRepository(session_factory),
            schools=SqlSchoolRepository(session_factory),
            classes=SqlClassRepository(session_factory),
            grades=SqlGradeRepository(session_factory),
            attendance=SqlAttendanceRepository(session_factory),
        )

    async def startup(self) -> None:
        await init_db(self.engine)

    async def shutdown(self) -> None:
        await close_db(self.engine)
