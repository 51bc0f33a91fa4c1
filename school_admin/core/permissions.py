# school_admin/core/permissions.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from school_admin.core.errors import NotFoundError, PermissionDenied
from school_admin.core.logging import logger
from school_admin.schemas.auth.tokens import SessionClaims
from school_admin.schemas.enums import UserRole


class Action(str, Enum):
    READ = 'read'
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'


class Resource(str, Enum):
    SCHOOL = 'school'
    TEACHER = 'teacher'
    STUDENT = 'student'
    CLASS = 'class'
    GRADE = 'grade'
    ATTENDANCE = 'attendance'
    PROFILE = 'profile'


class AccessDecision(str, Enum):
    ALLOW = 'allow'
    DENY_ROLE = 'deny_role'
    DENY_NO_TENANT = 'deny_no_tenant'
    DENY_TENANT_SCOPE = 'deny_tenant_scope'
    DENY_PROTECTED_ACCOUNT = 'deny_protected_account'

    @property
    def allowed(self) -> bool:
        return self is AccessDecision.ALLOW


@dataclass(frozen=True)
class Target:
    """
    What an action is aimed at.

    school_id, owner_id, role and teacher_id are filled in when the record is
    known: owner_id is the user the record belongs to (the user itself for
    teacher/student/profile targets, the student for grades and attendance),
    role is the role of that user, teacher_id is the teacher of the class the
    record belongs to.
    """
    kind: Resource
    school_id: Optional[str] = None
    owner_id: Optional[str] = None
    role: Optional[UserRole] = None
    teacher_id: Optional[str] = None


_ALL_ACTIONS = frozenset(Action)

ROLE_ENTITLEMENTS: Dict[UserRole, Dict[Resource, FrozenSet[Action]]] = {
    UserRole.ADMIN: {
        kind: _ALL_ACTIONS for kind in Resource if kind is not Resource.PROFILE
    },
    UserRole.TEACHER: {
        Resource.GRADE: frozenset({Action.READ, Action.CREATE, Action.UPDATE}),
        Resource.ATTENDANCE: frozenset({Action.READ, Action.CREATE, Action.UPDATE}),
        Resource.CLASS: frozenset({Action.READ}),
        Resource.STUDENT: frozenset({Action.READ}),
    },
    UserRole.STUDENT: {
        Resource.GRADE: frozenset({Action.READ}),
        Resource.ATTENDANCE: frozenset({Action.READ}),
    },
}


def is_entitled(role: UserRole, action: Action, kind: Resource) -> bool:
    return action in ROLE_ENTITLEMENTS.get(role, {}).get(kind, frozenset())


def evaluate_access(actor: SessionClaims, action: Action, target: Target) -> AccessDecision:
    """
    Decide whether an actor may perform an action on a target.

    Rules are applied in order and the first one that fails decides:
    own-profile check, role entitlement, tenant membership, tenant match,
    protected admin accounts, then class/ownership scoping for teachers
    and students.
    """
    if target.kind is Resource.PROFILE:
        if action in (Action.READ, Action.UPDATE) and target.owner_id == actor.user_id:
            return AccessDecision.ALLOW
        return AccessDecision.DENY_ROLE

    if not is_entitled(actor.role, action, target.kind):
        return AccessDecision.DENY_ROLE

    if not actor.school_id:
        return AccessDecision.DENY_NO_TENANT

    if target.school_id is not None and target.school_id != actor.school_id:
        return AccessDecision.DENY_TENANT_SCOPE

    if actor.role is UserRole.ADMIN:
        if (
            action in (Action.UPDATE, Action.DELETE)
            and target.role is UserRole.ADMIN
        ):
            return AccessDecision.DENY_PROTECTED_ACCOUNT
        return AccessDecision.ALLOW

    if actor.role is UserRole.TEACHER:
        if target.teacher_id != actor.user_id:
            return AccessDecision.DENY_ROLE
        return AccessDecision.ALLOW

    # Students only ever read their own records
    if target.owner_id != actor.user_id:
        return AccessDecision.DENY_ROLE
    return AccessDecision.ALLOW


def enforce_access(actor: SessionClaims, action: Action, target: Target) -> None:
    """Raise the HTTP-facing error for a denied decision"""
    decision = evaluate_access(actor, action, target)
    if decision.allowed:
        return

    logger.warning(
        f"Access denied: {decision.value} for {actor.role.value} "
        f"{action.value} {target.kind.value}",
        extra={"user_id": actor.user_id, "school_id": actor.school_id}
    )
    if decision is AccessDecision.DENY_TENANT_SCOPE:
        raise NotFoundError(f"{target.kind.value.capitalize()} not found")
    if decision is AccessDecision.DENY_PROTECTED_ACCOUNT:
        raise PermissionDenied("Admins cannot modify other admin accounts")
    if decision is AccessDecision.DENY_NO_TENANT:
        raise PermissionDenied("No school is associated with this account")
    raise PermissionDenied()
