import asyncio
from collections.abc import Iterable
from uuid import UUID

from chainvault.core.modules.audit.models import AuditRecord
from chainvault.core.modules.file.models import FileRecord
from chainvault.core.modules.user.models import User
from chainvault.core.repository.base import Repository


class MemoryRepository(Repository):
    """Process-local repository.

    Every mutation runs under one lock, so the nonce compare-and-clear is
    serialised against concurrent logins. Records are copied on the way in and
    out; callers never hold a reference to stored state.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._users: dict[UUID, User] = {}
        self._user_ids_by_wallet: dict[str, UUID] = {}
        self._files: dict[UUID, FileRecord] = {}
        self._audit_records: list[AuditRecord] = []

    async def get_user(self, user_id: UUID) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_wallet(self, wallet_address: str) -> User | None:
        user_id = self._user_ids_by_wallet.get(wallet_address.lower())
        return await self.get_user(user_id) if user_id else None

    async def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        return {user_id: self._users[user_id].model_copy() for user_id in set(user_ids) if user_id in self._users}

    async def upsert_user_nonce(self, wallet_address: str, nonce: str, is_admin: bool = False) -> User:
        async with self._lock:
            user = self._get_or_create(wallet_address, is_admin)
            user.nonce = nonce
            return user.model_copy()

    async def clear_nonce_if_matches(self, user_id: UUID, nonce: str) -> bool:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None or user.nonce is None or user.nonce != nonce:
                return False
            user.nonce = None
            return True

    async def set_admin(self, wallet_address: str, is_admin: bool) -> User:
        async with self._lock:
            user = self._get_or_create(wallet_address, is_admin)
            user.is_admin = is_admin
            return user.model_copy()

    async def get_file(self, file_id: UUID) -> FileRecord | None:
        file = self._files.get(file_id)
        return file.model_copy() if file else None

    async def get_file_by_cid(self, cid: str) -> FileRecord | None:
        file = next((f for f in self._files.values() if f.cid == cid), None)
        return file.model_copy() if file else None

    async def list_files_by_user(self, user_id: UUID) -> list[FileRecord]:
        return [f for f in await self.list_all_files() if f.user_id == user_id]

    async def list_all_files(self) -> list[FileRecord]:
        # Insertion order is upload order
        return [f.model_copy() for f in reversed(self._files.values())]

    async def insert_file(self, file: FileRecord) -> FileRecord:
        async with self._lock:
            self._files[file.id] = file.model_copy()
        return file

    async def delete_file(self, file_id: UUID) -> bool:
        async with self._lock:
            return self._files.pop(file_id, None) is not None

    async def insert_audit_record(self, record: AuditRecord) -> AuditRecord:
        async with self._lock:
            self._audit_records.append(record.model_copy(deep=True))
        return record

    async def list_audit_records(self, limit: int) -> list[AuditRecord]:
        if limit <= 0:
            return []
        return [r.model_copy(deep=True) for r in reversed(self._audit_records[-limit:])]

    def _get_or_create(self, wallet_address: str, is_admin: bool) -> User:
        """Return the stored user for the wallet, creating it if needed. Caller holds the lock."""
        user_id = self._user_ids_by_wallet.get(wallet_address.lower())
        if user_id is not None:
            return self._users[user_id]
        user = User(wallet_address=wallet_address, is_admin=is_admin)
        self._users[user.id] = user
        self._user_ids_by_wallet[wallet_address.lower()] = user.id
        return user
