"""
Process-local storage backend. Records live in dicts keyed by id, in
insertion order. Every read returns a copy so callers cannot mutate the
store behind the repository's back.
"""

import datetime as dt
from collections import defaultdict
from itertools import count
from typing import Any, Dict, List, Optional

from school_admin.schemas import (
    AttendanceInDB,
    ClassInDB,
    GradeInDB,
    SchoolInDB,
    UserInDB,
    UserRole,
)
from .base import ATTENDANCE_KEY, GRADE_KEY, Storage


class IdSequence:
    """Per-prefix counters: user1, user2, class1 ... Ids are never reused."""

    def __init__(self):
        self._counters = defaultdict(lambda: count(1))

    def next(self, prefix: str) -> str:
        return f"{prefix}{next(self._counters[prefix])}"


class MemoryUserRepository:
    def __init__(self, ids: IdSequence):
        self._ids = ids
        self._rows: Dict[str, UserInDB] = {}

    async def get(self, user_id: str) -> Optional[UserInDB]:
        user = self._rows.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_by_email(self, email: str) -> Optional[UserInDB]:
        email = email.strip().lower()
        for user in self._rows.values():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    async def list(
        self, school_id: Optional[str] = None, role: Optional[UserRole] = None
    ) -> List[UserInDB]:
        return [
            user.model_copy(deep=True)
            for user in self._rows.values()
            if (school_id is None or user.school_id == school_id)
            and (role is None or user.role == role)
        ]

    async def add(self, data: Dict[str, Any]) -> UserInDB:
        user = UserInDB(id=self._ids.next("user"), **data)
        self._rows[user.id] = user
        return user.model_copy(deep=True)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserInDB]:
        user = self._rows.get(user_id)
        if user is None:
            return None
        updated = UserInDB.model_validate({**user.model_dump(), **changes, "id": user_id})
        self._rows[user_id] = updated
        return updated.model_copy(deep=True)

    async def delete(self, user_id: str) -> bool:
        return self._rows.pop(user_id, None) is not None

    async def remove_class_from_students(self, class_id: str, school_id: str) -> int:
        pruned = 0
        for user in self._rows.values():
            if user.school_id == school_id and class_id in user.class_ids:
                user.class_ids = [cid for cid in user.class_ids if cid != class_id]
                pruned += 1
        return pruned


class MemorySchoolRepository:
    def __init__(self, ids: IdSequence):
        self._ids = ids
        self._rows: Dict[str, SchoolInDB] = {}

    async def get(self, school_id: str) -> Optional[SchoolInDB]:
        school = self._rows.get(school_id)
        return school.model_copy() if school else None

    async def list(self) -> List[SchoolInDB]:
        return [school.model_copy() for school in self._rows.values()]

    async def add(self, data: Dict[str, Any]) -> SchoolInDB:
        school = SchoolInDB(id=self._ids.next("school"), **data)
        self._rows[school.id] = school
        return school.model_copy()

    async def update(self, school_id: str, changes: Dict[str, Any]) -> Optional[SchoolInDB]:
        school = self._rows.get(school_id)
        if school is None:
            return None
        updated = SchoolInDB.model_validate({**school.model_dump(), **changes, "id": school_id})
        self._rows[school_id] = updated
        return updated.model_copy()


class MemoryClassRepository:
    def __init__(self, ids: IdSequence):
        self._ids = ids
        self._rows: Dict[str, ClassInDB] = {}

    async def get(self, class_id: str) -> Optional[ClassInDB]:
        class_ = self._rows.get(class_id)
        return class_.model_copy() if class_ else None

    async def list(self, school_id: str, teacher_id: Optional[str] = None) -> List[ClassInDB]:
        return [
            class_.model_copy()
            for class_ in self._rows.values()
            if class_.school_id == school_id
            and (teacher_id is None or class_.teacher_id == teacher_id)
        ]

    async def add(self, data: Dict[str, Any]) -> ClassInDB:
        class_ = ClassInDB(id=self._ids.next("class"), **data)
        self._rows[class_.id] = class_
        return class_.model_copy()

    async def update(self, class_id: str, changes: Dict[str, Any]) -> Optional[ClassInDB]:
        class_ = self._rows.get(class_id)
        if class_ is None:
            return None
        updated = ClassInDB.model_validate({**class_.model_dump(), **changes, "id": class_id})
        self._rows[class_id] = updated
        return updated.model_copy()

    async def delete(self, class_id: str) -> bool:
        return self._rows.pop(class_id, None) is not None


class MemoryGradeRepository:
    def __init__(self, ids: IdSequence):
        self._ids = ids
        self._rows: Dict[str, GradeInDB] = {}

    async def upsert(self, data: Dict[str, Any]) -> GradeInDB:
        key = tuple(data.get(name) for name in GRADE_KEY)
        for grade in self._rows.values():
            if tuple(getattr(grade, name) for name in GRADE_KEY) == key:
                grade.score = data["score"]
                return grade.model_copy()
        grade = GradeInDB(id=self._ids.next("grade"), **data)
        self._rows[grade.id] = grade
        return grade.model_copy()

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> List[GradeInDB]:
        return [
            grade.model_copy()
            for grade in self._rows.values()
            if grade.school_id == school_id
            and (student_id is None or grade.student_id == student_id)
            and (class_id is None or grade.class_id == class_id)
            and (subject is None or grade.subject == subject)
        ]


class MemoryAttendanceRepository:
    def __init__(self, ids: IdSequence):
        self._ids = ids
        self._rows: Dict[str, AttendanceInDB] = {}

    async def upsert(self, data: Dict[str, Any]) -> AttendanceInDB:
        key = tuple(data.get(name) for name in ATTENDANCE_KEY)
        for record in self._rows.values():
            if tuple(getattr(record, name) for name in ATTENDANCE_KEY) == key:
                record.status = data["status"]
                return record.model_copy()
        record = AttendanceInDB(id=self._ids.next("att"), **data)
        self._rows[record.id] = record
        return record.model_copy()

    async def list(
        self,
        school_id: str,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        on_date: Optional[dt.date] = None,
    ) -> List[AttendanceInDB]:
        return [
            record.model_copy()
            for record in self._rows.values()
            if record.school_id == school_id
            and (student_id is None or record.student_id == student_id)
            and (class_id is None or record.class_id == class_id)
            and (on_date is None or record.date == on_date)
        ]


class MemoryStorage(Storage):
    def __init__(self):
        ids = IdSequence()
        super().__init__(
            users=MemoryUserRepository(ids),
            schools=MemorySchoolRepository(ids),
            classes=MemoryClassRepository(ids),
            grades=MemoryGradeRepository(ids),
            attendance=MemoryAttendanceRepository(ids),
        )
