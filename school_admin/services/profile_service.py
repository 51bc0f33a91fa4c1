from school_admin.core.errors import NotFoundError
from school_admin.core.logging import logger
from school_admin.core.permissions import Action, Resource, Target, enforce_access
from school_admin.schemas import ProfileResponse, ProfileUpdateRequest, SessionClaims
from .base_service import BaseService


class ProfileService(BaseService):
    """The caller's own account, for every role"""

    async def get_profile(self, actor: SessionClaims) -> ProfileResponse:
        enforce_access(actor, Action.READ, Target(kind=Resource.PROFILE, owner_id=actor.user_id))
        user = await self.storage.users.get(actor.user_id)
        if user is None:
            raise NotFoundError("User not found")
        return ProfileResponse.model_validate(user)

    async def update_profile(self, actor: SessionClaims, update: ProfileUpdateRequest) -> ProfileResponse:
        """Change name, email or password. Role and school stay as they are."""
        enforce_access(actor, Action.UPDATE, Target(kind=Resource.PROFILE, owner_id=actor.user_id))
        changes = self._require_changes(self._account_changes(update))

        async with self.storage.lock:
            if "email" in changes:
                await self._ensure_email_available(changes["email"], exclude_user_id=actor.user_id)
            user = await self.storage.users.update(actor.user_id, changes)
        if user is None:
            raise NotFoundError("User not found")

        logger.info(f"User {user.id} updated their profile")
        return ProfileResponse.model_validate(user)
