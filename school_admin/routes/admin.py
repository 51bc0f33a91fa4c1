from typing import List
from fastapi import APIRouter, Depends, status

from school_admin.core.dependencies import (
    get_class_service,
    get_current_claims,
    get_school_service,
    get_student_service,
    get_teacher_service,
)
from school_admin.schemas import (
    ClassCreateRequest,
    ClassMutationResponse,
    ClassResponse,
    ClassUpdateRequest,
    MessageResponse,
    NamedRef,
    SchoolResponse,
    SchoolUpdateRequest,
    SessionClaims,
    StudentCreateRequest,
    StudentMutationResponse,
    StudentResponse,
    StudentUpdateRequest,
    TeacherCreateRequest,
    TeacherMutationResponse,
    TeacherResponse,
    TeacherUpdateRequest,
)
from school_admin.services import ClassService, SchoolService, StudentService, TeacherService

router = APIRouter(tags=["Admin"])


# School Management Endpoints
@router.get("/school", response_model=SchoolResponse)
async def get_school(
    claims: SessionClaims = Depends(get_current_claims),
    school_service: SchoolService = Depends(get_school_service)
):
    """Details of the admin's own school"""
    return await school_service.get_school(claims)

@router.put("/school", response_model=SchoolResponse)
async def update_school(
    request: SchoolUpdateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    school_service: SchoolService = Depends(get_school_service)
):
    return await school_service.update_school(claims, request)


# Teacher Management Endpoints
@router.get("/teachers", response_model=List[TeacherResponse])
async def list_teachers(
    claims: SessionClaims = Depends(get_current_claims),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    return await teacher_service.list_teachers(claims)

@router.get("/teachers-list", response_model=List[NamedRef])
async def list_teacher_refs(
    claims: SessionClaims = Depends(get_current_claims),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    """Minimal id/name projection for pickers"""
    return await teacher_service.list_teacher_refs(claims)

@router.post("/teachers", response_model=TeacherMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    request: TeacherCreateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    teacher = await teacher_service.create_teacher(claims, request)
    return TeacherMutationResponse(message="Teacher created successfully", teacher=teacher)

@router.put("/teachers/{teacher_id}", response_model=TeacherMutationResponse)
async def update_teacher(
    teacher_id: str,
    request: TeacherUpdateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    teacher = await teacher_service.update_teacher(claims, teacher_id, request)
    return TeacherMutationResponse(message="Teacher updated successfully", teacher=teacher)

@router.delete("/teachers/{teacher_id}", response_model=MessageResponse)
async def delete_teacher(
    teacher_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    await teacher_service.delete_teacher(claims, teacher_id)
    return MessageResponse(message="Teacher deleted successfully")


# Student Management Endpoints
@router.get("/students", response_model=List[StudentResponse])
async def list_students(
    claims: SessionClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service)
):
    """Students of the school, each with the names of their classes"""
    return await student_service.list_students(claims)

@router.post("/students", response_model=StudentMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    request: StudentCreateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service)
):
    student = await student_service.create_student(claims, request)
    return StudentMutationResponse(message="Student created successfully", student=student)

@router.put("/students/{student_id}", response_model=StudentMutationResponse)
async def update_student(
    student_id: str,
    request: StudentUpdateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service)
):
    student = await student_service.update_student(claims, student_id, request)
    return StudentMutationResponse(message="Student updated successfully", student=student)

@router.delete("/students/{student_id}", response_model=MessageResponse)
async def delete_student(
    student_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service)
):
    await student_service.delete_student(claims, student_id)
    return MessageResponse(message="Student deleted successfully")


# Class Management Endpoints
@router.get("/classes", response_model=List[ClassResponse])
async def list_classes(
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.list_classes(claims)

@router.get("/classes-list", response_model=List[NamedRef])
async def list_class_refs(
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.list_class_refs(claims)

@router.post("/classes", response_model=ClassMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    request: ClassCreateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    class_ = await class_service.create_class(claims, request)
    return ClassMutationResponse(message="Class created successfully", class_=class_)

@router.put("/classes/{class_id}", response_model=ClassMutationResponse)
async def update_class(
    class_id: str,
    request: ClassUpdateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    class_ = await class_service.update_class(claims, class_id, request)
    return ClassMutationResponse(message="Class updated successfully", class_=class_)

@router.delete("/classes/{class_id}", response_model=MessageResponse)
async def delete_class(
    class_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    class_service: ClassService = Depends(get_class_service)
):
    await class_service.delete_class(claims, class_id)
    return MessageResponse(message="Class deleted successfully")
