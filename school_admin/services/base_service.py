# school_admin/services/base_service.py
from typing import Any, Dict, Iterable, List, Optional

from school_admin.core.errors import ConflictError, NotFoundError, ValidationError
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.core.security import get_password_hash
from school_admin.repositories import Storage
from school_admin.schemas import ClassInDB, SessionClaims, UserInDB, UserRole


class BaseService:
    def __init__(self, storage: Storage):
        self.storage = storage

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    async def _ensure_email_available(self, email: str, exclude_user_id: Optional[str] = None) -> None:
        existing = await self.storage.users.get_by_email(email)
        if existing and existing.id != exclude_user_id:
            raise ConflictError("User already exists with this email")

    @staticmethod
    def _require_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
        if not changes:
            raise ValidationError("No valid fields provided for update")
        return changes

    def _account_changes(self, update) -> Dict[str, Any]:
        """Collect name/email/password changes from an update request"""
        data = update.model_dump(exclude_unset=True, exclude_none=True)
        changes: Dict[str, Any] = {}
        if data.get("name"):
            changes["name"] = data["name"]
        if data.get("email"):
            changes["email"] = self.normalize_email(data["email"])
        if data.get("password"):
            changes["password_hash"] = get_password_hash(data["password"])
        return changes

    async def _load_user(
        self,
        actor: SessionClaims,
        action: Action,
        kind: Resource,
        user_id: str,
        expected_role: UserRole,
    ) -> UserInDB:
        """Load a user the actor may act on, scoped to the actor's school"""
        label = kind.value.capitalize()
        user = await self.storage.users.get(user_id)
        if user is None:
            raise NotFoundError(f"{label} not found")

        enforce_access(
            actor,
            action,
            Target(kind=kind, school_id=user.school_id, owner_id=user.id, role=user.role),
        )
        if user.role != expected_role:
            raise NotFoundError(f"{label} not found")
        return user

    async def _load_class(
        self,
        actor: SessionClaims,
        action: Action,
        kind: Resource,
        class_id: str,
    ) -> ClassInDB:
        """Load a class and check the actor may act on records of kind within it"""
        class_ = await self.storage.classes.get(class_id)
        if class_ is None:
            raise NotFoundError("Class not found")

        enforce_access(
            actor,
            action,
            Target(kind=kind, school_id=class_.school_id, teacher_id=class_.teacher_id),
        )
        return class_

    async def _validate_teacher(self, teacher_id: str, school_id: str) -> UserInDB:
        teacher = await self.storage.users.get(teacher_id)
        if not teacher or teacher.role != UserRole.TEACHER or teacher.school_id != school_id:
            raise ValidationError(
                "Invalid teacher ID for this school",
                details={"field": "teacherId"}
            )
        return teacher

    async def _validate_class_ids(self, class_ids: Iterable[str], school_id: str) -> List[str]:
        """Deduplicate class ids, keeping order, and check each belongs to the school"""
        unique_ids = list(dict.fromkeys(class_ids))
        invalid = []
        for class_id in unique_ids:
            class_ = await self.storage.classes.get(class_id)
            if not class_ or class_.school_id != school_id:
                invalid.append(class_id)
        if invalid:
            raise ValidationError(
                "One or more class IDs are invalid for this school",
                details={"field": "classIds", "invalid": invalid}
            )
        return unique_ids

    async def _validate_enrolment(self, student_id: str, class_: ClassInDB) -> UserInDB:
        student = await self.storage.users.get(student_id)
        if (
            not student
            or student.role != UserRole.STUDENT
            or student.school_id != class_.school_id
            or class_.id not in student.class_ids
        ):
            raise ValidationError(
                "Student is not enrolled in this class",
                details={"field": "studentId"}
            )
        return student

    async def _load_record_owner(self, actor: SessionClaims, kind: Resource, student_id: str) -> UserInDB:
        """Load the student whose grade or attendance records are being read"""
        student = await self.storage.users.get(student_id)
        if student is None or student.role != UserRole.STUDENT:
            raise NotFoundError("Student not found")

        enforce_access(
            actor,
            Action.READ,
            Target(kind=kind, school_id=student.school_id, owner_id=student.id),
        )
        return student
