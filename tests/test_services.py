"""Service layer against a seeded in-memory store."""
import datetime as dt

import pytest

from school_admin import seed_demo_data
from school_admin.core.errors import (
    ConflictError,
    InvalidCredentialsException,
    NotFoundError,
    PermissionDenied,
    ValidationError,
)
from school_admin.repositories import MemoryStorage
from school_admin.schemas import (
    AttendanceRecordRequest,
    ClassCreateRequest,
    ClassUpdateRequest,
    GradeRecordRequest,
    NewSchoolRequest,
    RegisterRequest,
    StudentCreateRequest,
    StudentUpdateRequest,
    TeacherCreateRequest,
    TeacherUpdateRequest,
    UserRole,
)
from school_admin.services import (
    AttendanceService,
    AuthService,
    ClassService,
    GradeService,
    StudentService,
    TeacherService,
)

from conftest import ADMIN_ID, CLASS_A, CLASS_B, SCHOOL_ID, STUDENT_ID, TEACHER_ID, make_claims

pytestmark = pytest.mark.anyio

ADMIN = make_claims(ADMIN_ID, UserRole.ADMIN, SCHOOL_ID)
TEACHER = make_claims(TEACHER_ID, UserRole.TEACHER, SCHOOL_ID)
STUDENT = make_claims(STUDENT_ID, UserRole.STUDENT, SCHOOL_ID)


async def seeded() -> MemoryStorage:
    storage = MemoryStorage()
    assert await seed_demo_data(storage)
    return storage


async def test_seed_runs_only_once():
    storage = await seeded()
    assert await seed_demo_data(storage) is False
    assert len(await storage.schools.list()) == 1
    assert len(await storage.users.list()) == 3


async def test_seed_ids_and_enrolment():
    storage = await seeded()
    student = await storage.users.get(STUDENT_ID)
    assert student.roll_number == "S1001"
    assert student.class_ids == [CLASS_A, CLASS_B]
    assert len(await storage.grades.list(SCHOOL_ID, student_id=STUDENT_ID)) == 2
    assert len(await storage.attendance.list(SCHOOL_ID, student_id=STUDENT_ID)) == 1


async def test_login_same_error_for_unknown_email_and_wrong_password():
    auth = AuthService(await seeded())
    with pytest.raises(InvalidCredentialsException) as unknown:
        await auth.login("nobody@example.com", "whatever")
    with pytest.raises(InvalidCredentialsException) as wrong:
        await auth.login("admin@example.com", "wrongpass")
    assert unknown.value.message == wrong.value.message


async def test_login_is_case_insensitive_on_email():
    auth = AuthService(await seeded())
    result = await auth.login("  Admin@Example.COM ", "adminpass")
    assert result.user.user_id == ADMIN_ID
    assert result.user.role is UserRole.ADMIN


async def test_register_admin_creates_school():
    storage = await seeded()
    user = await AuthService(storage).register(RegisterRequest(
        email="boss@x.com",
        password="secret1",
        name="Boss",
        role=UserRole.ADMIN,
        school=NewSchoolRequest(name="X School", address="1 Road", contact_info="555"),
    ))
    school = await storage.schools.get(user.school_id)
    assert school.name == "X School"


async def test_register_rejects_unknown_school():
    auth = AuthService(await seeded())
    with pytest.raises(ValidationError):
        await auth.register(RegisterRequest(
            email="t@x.com", password="secret1", name="T", role=UserRole.TEACHER, school_id="school99"
        ))


async def test_register_duplicate_email_conflicts():
    auth = AuthService(await seeded())
    with pytest.raises(ConflictError):
        await auth.register(RegisterRequest(
            email="TEACHER1@example.com", password="secret1", name="T", role=UserRole.TEACHER, school_id=SCHOOL_ID
        ))


async def test_email_uniqueness_survives_creates_and_updates():
    storage = await seeded()
    teachers = TeacherService(storage)
    created = await teachers.create_teacher(
        ADMIN, TeacherCreateRequest(email="new@x.com", password="secret1", name="New")
    )
    with pytest.raises(ConflictError):
        await teachers.create_teacher(
            ADMIN, TeacherCreateRequest(email="NEW@x.com", password="secret1", name="Dup")
        )
    with pytest.raises(ConflictError):
        await teachers.update_teacher(ADMIN, created.id, TeacherUpdateRequest(email="student1@example.com"))

    emails = [user.email for user in await storage.users.list()]
    assert len(emails) == len(set(emails))


async def test_update_keeps_own_email():
    teachers = TeacherService(await seeded())
    updated = await teachers.update_teacher(
        ADMIN, TEACHER_ID, TeacherUpdateRequest(email="teacher1@example.com", name="Renamed")
    )
    assert updated.name == "Renamed"


async def test_update_without_fields_is_rejected():
    teachers = TeacherService(await seeded())
    with pytest.raises(ValidationError):
        await teachers.update_teacher(ADMIN, TEACHER_ID, TeacherUpdateRequest())


async def test_teacher_password_update_rehashes():
    storage = await seeded()
    await TeacherService(storage).update_teacher(ADMIN, TEACHER_ID, TeacherUpdateRequest(password="brandnew"))
    result = await AuthService(storage).login("teacher1@example.com", "brandnew")
    assert result.user.user_id == TEACHER_ID


async def test_admin_cannot_delete_other_admin():
    storage = await seeded()
    other = await AuthService(storage).register(RegisterRequest(
        email="admin2@example.com", password="secret1", name="Second", role=UserRole.ADMIN, school_id=SCHOOL_ID
    ))
    with pytest.raises(PermissionDenied):
        await TeacherService(storage).delete_teacher(ADMIN, other.id)
    with pytest.raises(PermissionDenied):
        await StudentService(storage).delete_student(ADMIN, other.id)
    assert await storage.users.get(other.id) is not None


async def test_class_teacher_must_belong_to_school():
    storage = await seeded()
    classes = ClassService(storage)
    with pytest.raises(ValidationError):
        await classes.create_class(ADMIN, ClassCreateRequest(name="Ghost", teacher_id="user999"))
    with pytest.raises(ValidationError):
        await classes.create_class(ADMIN, ClassCreateRequest(name="Wrong role", teacher_id=STUDENT_ID))
    with pytest.raises(ValidationError):
        await classes.update_class(ADMIN, CLASS_A, ClassUpdateRequest(teacher_id=ADMIN_ID))

    class_ = await storage.classes.get(CLASS_A)
    teacher = await storage.users.get(class_.teacher_id)
    assert teacher.role is UserRole.TEACHER and teacher.school_id == class_.school_id


async def test_deleting_teacher_leaves_class_without_name():
    storage = await seeded()
    await TeacherService(storage).delete_teacher(ADMIN, TEACHER_ID)
    listed = await ClassService(storage).list_classes(ADMIN)
    assert {c.id for c in listed} == {CLASS_A, CLASS_B}
    assert all(c.teacher_name is None and c.teacher_id == TEACHER_ID for c in listed)


async def test_deleting_class_prunes_enrolment():
    storage = await seeded()
    await ClassService(storage).delete_class(ADMIN, CLASS_B)
    student = await storage.users.get(STUDENT_ID)
    assert student.class_ids == [CLASS_A]


async def test_student_class_ids_validated_and_deduplicated():
    storage = await seeded()
    students = StudentService(storage)
    with pytest.raises(ValidationError):
        await students.create_student(ADMIN, StudentCreateRequest(
            email="s2@x.com", password="secret1", name="S2", roll_number="S2", class_ids=["class404"]
        ))
    created = await students.create_student(ADMIN, StudentCreateRequest(
        email="s2@x.com", password="secret1", name="S2", roll_number="S2", class_ids=[CLASS_A, CLASS_A]
    ))
    assert created.class_ids == [CLASS_A]
    assert [ref.name for ref in created.classes] == ["Class 10 - Section A"]

    updated = await students.update_student(ADMIN, created.id, StudentUpdateRequest(class_ids=[]))
    assert updated.class_ids == []


async def test_other_school_records_are_not_found():
    storage = await seeded()
    outsider = make_claims("user99", UserRole.ADMIN, "school2")
    with pytest.raises(NotFoundError):
        await TeacherService(storage).update_teacher(outsider, TEACHER_ID, TeacherUpdateRequest(name="Hacked"))
    with pytest.raises(NotFoundError):
        await ClassService(storage).delete_class(outsider, CLASS_A)
    assert (await storage.users.get(TEACHER_ID)).name == "Teacher One"
    assert await storage.classes.get(CLASS_A) is not None


async def test_grade_upsert_keeps_latest_score():
    storage = await seeded()
    grades = GradeService(storage)
    request = GradeRecordRequest(student_id=STUDENT_ID, subject="Chemistry", score=70, term="Final")
    first = await grades.record_grade(TEACHER, CLASS_A, request)
    second = await grades.record_grade(
        TEACHER, CLASS_A, request.model_copy(update={"score": "B+"})
    )
    assert first.id == second.id
    records = await grades.list_class_grades(TEACHER, CLASS_A, subject="Chemistry")
    assert [(g.score, g.term) for g in records] == [("B+", "Final")]


async def test_grade_requires_enrolment():
    storage = await seeded()
    student = await StudentService(storage).create_student(ADMIN, StudentCreateRequest(
        email="s3@x.com", password="secret1", name="S3", roll_number="S3"
    ))
    with pytest.raises(ValidationError):
        await GradeService(storage).record_grade(
            TEACHER, CLASS_A, GradeRecordRequest(student_id=student.id, subject="Art", score="A")
        )


async def test_teacher_limited_to_taught_classes():
    storage = await seeded()
    other_teacher = await TeacherService(storage).create_teacher(
        ADMIN, TeacherCreateRequest(email="t2@x.com", password="secret1", name="T2")
    )
    class_ = await ClassService(storage).create_class(
        ADMIN, ClassCreateRequest(name="Class 8", teacher_id=other_teacher.id)
    )
    with pytest.raises(PermissionDenied):
        await GradeService(storage).list_class_grades(TEACHER, class_.id)
    with pytest.raises(PermissionDenied):
        await StudentService(storage).list_class_students(TEACHER, class_.id)


async def test_attendance_upsert_and_date_filter():
    storage = await seeded()
    attendance = AttendanceService(storage)
    day = dt.date(2024, 7, 28)
    await attendance.record_attendance(
        TEACHER, CLASS_A, AttendanceRecordRequest(student_id=STUDENT_ID, date=day, status="late")
    )
    records = await attendance.list_class_attendance(TEACHER, CLASS_A, on_date=day)
    assert len(records) == 1
    assert records[0].status.value == "late"
    assert await attendance.list_class_attendance(TEACHER, CLASS_A, on_date=dt.date(2024, 7, 29)) == []


async def test_students_read_only_their_own_records():
    storage = await seeded()
    other = await StudentService(storage).create_student(ADMIN, StudentCreateRequest(
        email="s4@x.com", password="secret1", name="S4", roll_number="S4", class_ids=[CLASS_A]
    ))
    grades = GradeService(storage)
    assert len(await grades.list_student_grades(STUDENT, STUDENT_ID)) == 2
    assert len(await grades.list_student_grades(STUDENT, STUDENT_ID, class_id=CLASS_B)) == 0
    with pytest.raises(PermissionDenied):
        await grades.list_student_grades(STUDENT, other.id)
    with pytest.raises(PermissionDenied):
        await AttendanceService(storage).list_student_attendance(TEACHER, STUDENT_ID)
