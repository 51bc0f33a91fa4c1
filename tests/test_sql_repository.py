"""The SQLAlchemy backend behind the same repository interface."""
import datetime as dt
from contextlib import asynccontextmanager

import pytest

from school_admin import seed_demo_data
from school_admin.core.database import create_engine
from school_admin.repositories.sql import SqlStorage
from school_admin.schemas import AttendanceStatus, UserRole

pytestmark = pytest.mark.anyio


@asynccontextmanager
async def sql_storage(seed: bool = True):
    storage = SqlStorage(create_engine("sqlite+aiosqlite://"))
    await storage.startup()
    try:
        if seed:
            assert await seed_demo_data(storage)
        yield storage
    finally:
        await storage.shutdown()


async def test_empty_database():
    async with sql_storage(seed=False) as storage:
        assert await storage.is_empty()
        assert await storage.schools.list() == []


async def test_seed_only_once():
    async with sql_storage() as storage:
        assert not await storage.is_empty()
        assert await seed_demo_data(storage) is False
        assert len(await storage.schools.list()) == 1


async def test_users_by_email_and_role():
    async with sql_storage() as storage:
        admin = await storage.users.get_by_email("  ADMIN@example.com ")
        assert admin is not None
        assert admin.role is UserRole.ADMIN
        assert admin.id.startswith("user_")

        teachers = await storage.users.list(school_id=admin.school_id, role=UserRole.TEACHER)
        assert [t.name for t in teachers] == ["Teacher One"]
        assert await storage.users.get("user_missing") is None


async def test_user_update_and_delete():
    async with sql_storage() as storage:
        student = await storage.users.get_by_email("student1@example.com")
        updated = await storage.users.update(student.id, {"name": "Renamed", "class_ids": student.class_ids[:1]})
        assert updated.name == "Renamed"
        assert len(updated.class_ids) == 1

        reloaded = await storage.users.get(student.id)
        assert reloaded.class_ids == updated.class_ids

        assert await storage.users.delete(student.id) is True
        assert await storage.users.delete(student.id) is False
        assert await storage.users.update(student.id, {"name": "Ghost"}) is None


async def test_class_delete_prunes_enrolment():
    async with sql_storage() as storage:
        student = await storage.users.get_by_email("student1@example.com")
        first, second = student.class_ids

        assert await storage.classes.delete(second)
        assert await storage.users.remove_class_from_students(second, student.school_id) == 1
        assert (await storage.users.get(student.id)).class_ids == [first]
        assert [c.id for c in await storage.classes.list(student.school_id)] == [first]


async def test_grade_upsert_keys_on_term():
    async with sql_storage() as storage:
        student = await storage.users.get_by_email("student1@example.com")
        key = {
            "student_id": student.id,
            "class_id": student.class_ids[0],
            "subject": "Mathematics",
            "school_id": student.school_id,
        }

        overwritten = await storage.grades.upsert({**key, "score": "B", "term": "Midterm"})
        grades = await storage.grades.list(student.school_id, subject="Mathematics")
        assert [(g.id, g.score) for g in grades] == [(overwritten.id, "B")]

        untermed = await storage.grades.upsert({**key, "score": 70, "term": None})
        again = await storage.grades.upsert({**key, "score": 75, "term": None})
        assert untermed.id == again.id
        assert again.score == 75
        assert len(await storage.grades.list(student.school_id, student_id=student.id)) == 3


async def test_attendance_upsert_and_date_filter():
    async with sql_storage() as storage:
        student = await storage.users.get_by_email("student1@example.com")
        class_id = student.class_ids[0]
        record = {
            "student_id": student.id,
            "class_id": class_id,
            "school_id": student.school_id,
        }

        seeded_day = dt.date(2024, 7, 28)
        changed = await storage.attendance.upsert({**record, "date": seeded_day, "status": AttendanceStatus.ABSENT})
        assert changed.status is AttendanceStatus.ABSENT
        await storage.attendance.upsert({**record, "date": dt.date(2024, 7, 29), "status": AttendanceStatus.LATE})

        on_day = await storage.attendance.list(student.school_id, class_id=class_id, on_date=seeded_day)
        assert [(r.id, r.status) for r in on_day] == [(changed.id, AttendanceStatus.ABSENT)]
        all_days = await storage.attendance.list(student.school_id, student_id=student.id)
        assert [r.date for r in all_days] == [seeded_day, dt.date(2024, 7, 29)]


async def test_school_update():
    async with sql_storage() as storage:
        school = (await storage.schools.list())[0]
        updated = await storage.schools.update(school.id, {"contact_info": "033-00000000"})
        assert updated.contact_info == "033-00000000"
        assert updated.name == school.name
        assert await storage.schools.update("school_missing", {"name": "X"}) is None
