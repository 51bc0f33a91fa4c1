from typing import Dict, List

from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.schemas import (
    ClassCreateRequest,
    ClassInDB,
    ClassResponse,
    ClassUpdateRequest,
    NamedRef,
    SessionClaims,
    UserRole,
)
from .base_service import BaseService


class ClassService(BaseService):
    """
    Classes of the admin's school. Every write re-validates that the
    referenced teacher is a teacher of the same school.
    """

    async def _teacher_names(self, school_id: str) -> Dict[str, str]:
        teachers = await self.storage.users.list(school_id=school_id, role=UserRole.TEACHER)
        return {teacher.id: teacher.name for teacher in teachers}

    @staticmethod
    def _to_response(class_: ClassInDB, teacher_names: Dict[str, str]) -> ClassResponse:
        response = ClassResponse.model_validate(class_)
        # A deleted teacher leaves the id behind with no name
        response.teacher_name = teacher_names.get(class_.teacher_id)
        return response

    async def list_classes(self, actor: SessionClaims) -> List[ClassResponse]:
        enforce_access(actor, Action.READ, Target(kind=Resource.CLASS, school_id=actor.school_id))
        classes = await self.storage.classes.list(actor.school_id)
        teacher_names = await self._teacher_names(actor.school_id)
        return [self._to_response(class_, teacher_names) for class_ in classes]

    async def list_class_refs(self, actor: SessionClaims) -> List[NamedRef]:
        enforce_access(actor, Action.READ, Target(kind=Resource.CLASS, school_id=actor.school_id))
        classes = await self.storage.classes.list(actor.school_id)
        return [NamedRef(id=class_.id, name=class_.name) for class_ in classes]

    async def list_teacher_classes(self, actor: SessionClaims) -> List[ClassResponse]:
        """Classes taught by the calling teacher"""
        enforce_access(
            actor,
            Action.READ,
            Target(kind=Resource.CLASS, school_id=actor.school_id, teacher_id=actor.user_id),
        )

        classes = await self.storage.classes.list(actor.school_id, teacher_id=actor.user_id)
        return [self._to_response(class_, {actor.user_id: actor.name}) for class_ in classes]

    async def create_class(self, actor: SessionClaims, request: ClassCreateRequest) -> ClassResponse:
        enforce_access(actor, Action.CREATE, Target(kind=Resource.CLASS, school_id=actor.school_id))

        async with self.storage.lock:
            teacher = await self._validate_teacher(request.teacher_id, actor.school_id)
            class_ = await self.storage.classes.add({
                "name": request.name,
                "teacher_id": teacher.id,
                "school_id": actor.school_id,
            })

        logger.info(f"Class {class_.id} created in school {actor.school_id}")
        return self._to_response(class_, {teacher.id: teacher.name})

    async def update_class(
        self,
        actor: SessionClaims,
        class_id: str,
        update: ClassUpdateRequest
    ) -> ClassResponse:
        async with self.storage.lock:
            await self._load_class(actor, Action.UPDATE, Resource.CLASS, class_id)
            changes = self._require_changes(update.model_dump(exclude_unset=True, exclude_none=True))
            if "teacher_id" in changes:
                await self._validate_teacher(changes["teacher_id"], actor.school_id)
            class_ = await self.storage.classes.update(class_id, changes)

        logger.info(f"Class {class_id} updated")
        return self._to_response(class_, await self._teacher_names(actor.school_id))

    async def delete_class(self, actor: SessionClaims, class_id: str) -> None:
        """Delete a class and drop it from every student's enrolment"""
        async with self.storage.lock:
            class_ = await self._load_class(actor, Action.DELETE, Resource.CLASS, class_id)
            await self.storage.classes.delete(class_id)
            pruned = await self.storage.users.remove_class_from_students(class_id, class_.school_id)

        logger.info(f"Class {class_id} deleted; removed from {pruned} student(s)")
