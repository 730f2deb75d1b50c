from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from chainvault.config import Config
from chainvault.core.core import Core
from chainvault.core.modules.audit.models import AuditRecordView
from chainvault.core.modules.auth.models import LoginResult
from chainvault.core.modules.file.models import AdminFileView, FileView
from chainvault.core.modules.pinning.client import ContentStore
from chainvault.core.modules.session.models import AuthToken
from chainvault.core.modules.user.models import UserView
from chainvault.core.repository.base import Repository


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(
        self, config: Config, repository: Repository | None = None, content_store: ContentStore | None = None
    ) -> None:
        self._core = Core(config, repository, content_store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def request_nonce(self, wallet_address: str) -> str:
        """Issue a login challenge for the wallet (public)."""
        return await self._core.services.auth.issue_nonce(wallet_address)

    async def login(self, wallet_address: str, signature: str, nonce: str) -> LoginResult:
        """Verify a signed challenge and create a session token (public)."""
        return await self._core.services.auth.verify_and_login(wallet_address, signature, nonce)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        """Get current user profile, read fresh from the store."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        user = await self._core.services.user.get_user(user_id)
        return UserView.from_domain(user)

    # === Files ===
    async def get_my_files(self, auth_token: AuthToken) -> list[FileView]:
        """Get files owned by the current user, newest first."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        files = await self._core.services.file.list_user_files(user_id)
        return [FileView.from_domain(file) for file in files]

    async def upload_file(
        self, auth_token: AuthToken, filename: str | None, content: bytes, mime_type: str | None
    ) -> FileView:
        """Pin a file and record it as owned by the current user."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        file = await self._core.services.file.upload_file(user_id, filename, content, mime_type)
        return FileView.from_domain(file)

    async def delete_file(self, auth_token: AuthToken, file_id: str) -> None:
        """Delete a file (owner only)."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.file.delete_file(user_id, file_id)

    # === Admin ===
    async def get_all_files(self, auth_token: AuthToken) -> list[AdminFileView]:
        """Get every user's files with owner wallet addresses (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        return await self._core.services.file.list_all_files_with_owners()

    async def get_audit_log(self, auth_token: AuthToken) -> list[AuditRecordView]:
        """Get the most recent audit records (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        records = await self._core.services.audit.recent()
        return [AuditRecordView.from_domain(record) for record in records]

    @property
    def max_upload_size(self) -> int:
        return self._core.config.max_upload_size
