# teacher_service.py
from typing import List

from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.core.security import get_password_hash
from school_admin.schemas import (
    NamedRef,
    SessionClaims,
    TeacherCreateRequest,
    TeacherResponse,
    TeacherUpdateRequest,
    UserRole,
)
from .base_service import BaseService


class TeacherService(BaseService):
    """Teacher accounts of the admin's school"""

    def _authorize(self, actor: SessionClaims, action: Action) -> None:
        enforce_access(actor, action, Target(kind=Resource.TEACHER, school_id=actor.school_id))

    async def list_teachers(self, actor: SessionClaims) -> List[TeacherResponse]:
        self._authorize(actor, Action.READ)
        teachers = await self.storage.users.list(school_id=actor.school_id, role=UserRole.TEACHER)
        return [TeacherResponse.model_validate(teacher) for teacher in teachers]

    async def list_teacher_refs(self, actor: SessionClaims) -> List[NamedRef]:
        self._authorize(actor, Action.READ)
        teachers = await self.storage.users.list(school_id=actor.school_id, role=UserRole.TEACHER)
        return [NamedRef(id=teacher.id, name=teacher.name) for teacher in teachers]

    async def create_teacher(self, actor: SessionClaims, request: TeacherCreateRequest) -> TeacherResponse:
        self._authorize(actor, Action.CREATE)
        email = self.normalize_email(request.email)

        async with self.storage.lock:
            await self._ensure_email_available(email)
            teacher = await self.storage.users.add({
                "email": email,
                "password_hash": get_password_hash(request.password),
                "role": UserRole.TEACHER,
                "name": request.name,
                "school_id": actor.school_id,
            })

        logger.info(f"Teacher {teacher.id} created in school {actor.school_id}")
        return TeacherResponse.model_validate(teacher)

    async def update_teacher(
        self,
        actor: SessionClaims,
        teacher_id: str,
        update: TeacherUpdateRequest
    ) -> TeacherResponse:
        async with self.storage.lock:
            await self._load_user(actor, Action.UPDATE, Resource.TEACHER, teacher_id, UserRole.TEACHER)
            changes = self._require_changes(self._account_changes(update))
            if "email" in changes:
                await self._ensure_email_available(changes["email"], exclude_user_id=teacher_id)
            teacher = await self.storage.users.update(teacher_id, changes)

        logger.info(f"Teacher {teacher_id} updated")
        return TeacherResponse.model_validate(teacher)

    async def delete_teacher(self, actor: SessionClaims, teacher_id: str) -> None:
        """
        Remove a teacher account. Classes taught by the teacher are left in
        place and keep the now dangling teacher id.
        """
        async with self.storage.lock:
            await self._load_user(actor, Action.DELETE, Resource.TEACHER, teacher_id, UserRole.TEACHER)
            await self.storage.users.delete(teacher_id)

        logger.info(f"Teacher {teacher_id} deleted from school {actor.school_id}")
