# school_service.py
from school_admin.core.errors import NotFoundError
from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.schemas import SchoolResponse, SchoolUpdateRequest, SessionClaims
from .base_service import BaseService


class SchoolService(BaseService):
    """The admin's own school. Schools are never created or deleted here."""

    async def get_school(self, actor: SessionClaims) -> SchoolResponse:
        enforce_access(actor, Action.READ, Target(kind=Resource.SCHOOL, school_id=actor.school_id))
        school = await self.storage.schools.get(actor.school_id)
        if school is None:
            raise NotFoundError("School not found")
        return SchoolResponse.model_validate(school)

    async def update_school(self, actor: SessionClaims, update: SchoolUpdateRequest) -> SchoolResponse:
        enforce_access(actor, Action.UPDATE, Target(kind=Resource.SCHOOL, school_id=actor.school_id))
        changes = self._require_changes(update.model_dump(exclude_unset=True, exclude_none=True))

        async with self.storage.lock:
            school = await self.storage.schools.update(actor.school_id, changes)
        if school is None:
            raise NotFoundError("School not found")

        logger.info(f"School {school.id} updated: {', '.join(sorted(changes))}")
        return SchoolResponse.model_validate(school)
