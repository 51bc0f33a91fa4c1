# student_service.py
from typing import Dict, List

from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.core.security import get_password_hash
from school_admin.schemas import (
    NamedRef,
    SessionClaims,
    StudentCreateRequest,
    StudentResponse,
    StudentUpdateRequest,
    UserInDB,
    UserRole,
)
from .base_service import BaseService


class StudentService(BaseService):
    """Student accounts of the admin's school, and class rosters"""

    async def _class_names(self, school_id: str) -> Dict[str, str]:
        return {class_.id: class_.name for class_ in await self.storage.classes.list(school_id)}

    @staticmethod
    def _to_response(student: UserInDB, class_names: Dict[str, str]) -> StudentResponse:
        response = StudentResponse.model_validate(student)
        response.classes = [
            NamedRef(id=class_id, name=class_names[class_id])
            for class_id in student.class_ids
            if class_id in class_names
        ]
        return response

    async def list_students(self, actor: SessionClaims) -> List[StudentResponse]:
        enforce_access(actor, Action.READ, Target(kind=Resource.STUDENT, school_id=actor.school_id))
        students = await self.storage.users.list(school_id=actor.school_id, role=UserRole.STUDENT)
        class_names = await self._class_names(actor.school_id)
        return [self._to_response(student, class_names) for student in students]

    async def list_class_students(self, actor: SessionClaims, class_id: str) -> List[StudentResponse]:
        """Students enrolled in a class; open to admins and the class's teacher"""
        class_ = await self._load_class(actor, Action.READ, Resource.STUDENT, class_id)
        students = await self.storage.users.list(school_id=class_.school_id, role=UserRole.STUDENT)
        class_names = await self._class_names(class_.school_id)
        return [
            self._to_response(student, class_names)
            for student in students
            if class_id in student.class_ids
        ]

    async def create_student(self, actor: SessionClaims, request: StudentCreateRequest) -> StudentResponse:
        enforce_access(actor, Action.CREATE, Target(kind=Resource.STUDENT, school_id=actor.school_id))
        email = self.normalize_email(request.email)

        async with self.storage.lock:
            await self._ensure_email_available(email)
            class_ids = await self._validate_class_ids(request.class_ids, actor.school_id)
            student = await self.storage.users.add({
                "email": email,
                "password_hash": get_password_hash(request.password),
                "role": UserRole.STUDENT,
                "name": request.name,
                "school_id": actor.school_id,
                "roll_number": request.roll_number,
                "class_ids": class_ids,
            })

        logger.info(f"Student {student.id} created in school {actor.school_id}")
        return self._to_response(student, await self._class_names(actor.school_id))

    async def update_student(
        self,
        actor: SessionClaims,
        student_id: str,
        update: StudentUpdateRequest
    ) -> StudentResponse:
        async with self.storage.lock:
            await self._load_user(actor, Action.UPDATE, Resource.STUDENT, student_id, UserRole.STUDENT)

            changes = self._account_changes(update)
            if update.roll_number:
                changes["roll_number"] = update.roll_number
            if update.class_ids is not None:
                changes["class_ids"] = await self._validate_class_ids(update.class_ids, actor.school_id)
            self._require_changes(changes)

            if "email" in changes:
                await self._ensure_email_available(changes["email"], exclude_user_id=student_id)
            student = await self.storage.users.update(student_id, changes)

        logger.info(f"Student {student_id} updated")
        return self._to_response(student, await self._class_names(actor.school_id))

    async def delete_student(self, actor: SessionClaims, student_id: str) -> None:
        async with self.storage.lock:
            await self._load_user(actor, Action.DELETE, Resource.STUDENT, student_id, UserRole.STUDENT)
            await self.storage.users.delete(student_id)

        logger.info(f"Student {student_id} deleted from school {actor.school_id}")
