import datetime as dt
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from school_admin.core.dependencies import (
    get_attendance_service,
    get_class_service,
    get_current_claims,
    get_grade_service,
    get_student_service,
)
from school_admin.schemas import (
    AttendanceRecordRequest,
    AttendanceResponse,
    ClassResponse,
    GradeRecordRequest,
    GradeResponse,
    SessionClaims,
    StudentResponse,
)
from school_admin.services import AttendanceService, ClassService, GradeService, StudentService

router = APIRouter(tags=["Roster"])


@router.get("/teacher/classes", response_model=List[ClassResponse])
async def list_my_classes(
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    """Classes taught by the calling teacher"""
    return await class_service.list_teacher_classes(claims)

@router.get("/classes/{class_id}/students", response_model=List[StudentResponse])
async def list_class_students(
    class_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service)
):
    return await student_service.list_class_students(claims, class_id)


# Grades
@router.get("/classes/{class_id}/grades", response_model=List[GradeResponse])
async def list_class_grades(
    class_id: str,
    subject: Optional[str] = Query(None, description="Only grades for this subject"),
    claims: SessionClaims = Depends(get_current_claims),
    grade_service: GradeService = Depends(get_grade_service)
):
    return await grade_service.list_class_grades(claims, class_id, subject)

@router.put("/classes/{class_id}/grades", response_model=GradeResponse)
async def record_grade(
    class_id: str,
    request: GradeRecordRequest,
    claims: SessionClaims = Depends(get_current_claims),
    grade_service: GradeService = Depends(get_grade_service)
):
    """Record a grade; a second write for the same subject and term overwrites it"""
    return await grade_service.record_grade(claims, class_id, request)


# Attendance
@router.get("/classes/{class_id}/attendance", response_model=List[AttendanceResponse])
async def list_class_attendance(
    class_id: str,
    date: Optional[dt.date] = Query(None, description="Day to list (YYYY-MM-DD)"),
    claims: SessionClaims = Depends(get_current_claims),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    return await attendance_service.list_class_attendance(claims, class_id, date)

@router.put("/classes/{class_id}/attendance", response_model=AttendanceResponse)
async def record_attendance(
    class_id: str,
    request: AttendanceRecordRequest,
    claims: SessionClaims = Depends(get_current_claims),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    return await attendance_service.record_attendance(claims, class_id, request)


# Per-student records
@router.get("/students/{student_id}/grades", response_model=List[GradeResponse])
async def list_student_grades(
    student_id: str,
    class_id: Optional[str] = Query(None, alias="classId"),
    claims: SessionClaims = Depends(get_current_claims),
    grade_service: GradeService = Depends(get_grade_service)
):
    return await grade_service.list_student_grades(claims, student_id, class_id)

@router.get("/students/{student_id}/attendance", response_model=List[AttendanceResponse])
async def list_student_attendance(
    student_id: str,
    class_id: Optional[str] = Query(None, alias="classId"),
    claims: SessionClaims = Depends(get_current_claims),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    return await attendance_service.list_student_attendance(claims, student_id, class_id)
