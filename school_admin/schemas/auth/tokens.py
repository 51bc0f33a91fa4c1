# school_admin/schemas/auth/tokens.py
from typing import Any, Dict, Optional
from ..common.base import CamelModel
from ..enums import UserRole


class SessionClaims(CamelModel):
    """Identity carried by a verified session token. Derived, never stored."""
    user_id: str
    email: str
    role: UserRole
    school_id: Optional[str] = None
    name: str

    @classmethod
    def from_user(cls, user) -> "SessionClaims":
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            school_id=user.school_id,
            name=user.name
        )

    def to_token_payload(self) -> Dict[str, Any]:
        return {
            "sub": self.user_id,
            "email": self.email,
            "role": self.role.value,
            "school_id": self.school_id,
            "name": self.name
        }

    @classmethod
    def from_token_payload(cls, payload: Dict[str, Any]) -> "SessionClaims":
        return cls(
            user_id=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            school_id=payload.get("school_id"),
            name=payload["name"]
        )
