from uuid import UUID

from chainvault.core.core import Service
from chainvault.core.modules.file.models import FileRecord
from chainvault.core.modules.session.models import AuthToken
from chainvault.core.modules.user.models import User
from chainvault.errors import AccessDeniedError, AdminAccessRequiredError, NotFoundError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> UUID:
        """Validate the token and return the user id it carries. No store lookup."""
        return self.core.services.session.decode_token(auth_token).user_id

    async def ensure_admin(self, auth_token: AuthToken) -> User:
        """Ensure the token belongs to a current admin, re-reading the user record."""
        user_id = await self.ensure_authenticated(auth_token)
        user = await self.core.services.user.find_user(user_id)
        if user is None or not user.is_admin:
            raise AdminAccessRequiredError
        return user

    async def ensure_file_owner(self, user_id: UUID, file_id: UUID) -> FileRecord:
        """Return the file if `user_id` owns it."""
        file = await self.repository.get_file(file_id)
        if file is None:
            raise NotFoundError(f"File '{file_id}' not found")
        if file.user_id != user_id:
            raise AccessDeniedError("Not allowed to modify this file")
        return file
