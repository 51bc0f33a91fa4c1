from typing import List, Optional

from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource
from school_admin.schemas import GradeRecordRequest, GradeResponse, SessionClaims
from .base_service import BaseService


class GradeService(BaseService):

    async def list_class_grades(
        self,
        actor: SessionClaims,
        class_id: str,
        subject: Optional[str] = None
    ) -> List[GradeResponse]:
        class_ = await self._load_class(actor, Action.READ, Resource.GRADE, class_id)
        grades = await self.storage.grades.list(class_.school_id, class_id=class_id, subject=subject)
        return [GradeResponse.model_validate(grade) for grade in grades]

    async def record_grade(
        self,
        actor: SessionClaims,
        class_id: str,
        request: GradeRecordRequest
    ) -> GradeResponse:
        """Insert or overwrite the grade for (student, class, subject, term)"""
        async with self.storage.lock:
            class_ = await self._load_class(actor, Action.UPDATE, Resource.GRADE, class_id)
            await self._validate_enrolment(request.student_id, class_)
            grade = await self.storage.grades.upsert({
                "student_id": request.student_id,
                "class_id": class_.id,
                "subject": request.subject,
                "score": request.score,
                "term": request.term,
                "school_id": class_.school_id,
            })

        logger.info(f"Grade {grade.id} recorded for class {class_id}")
        return GradeResponse.model_validate(grade)

    async def list_student_grades(
        self,
        actor: SessionClaims,
        student_id: str,
        class_id: Optional[str] = None
    ) -> List[GradeResponse]:
        student = await self._load_record_owner(actor, Resource.GRADE, student_id)
        grades = await self.storage.grades.list(
            student.school_id, student_id=student.id, class_id=class_id
        )
        return [GradeResponse.model_validate(grade) for grade in grades]
