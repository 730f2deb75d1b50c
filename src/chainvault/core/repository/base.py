"""Persistence interface for users, files and audit records."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from chainvault.core.modules.audit.models import AuditRecord
from chainvault.core.modules.file.models import FileRecord
from chainvault.core.modules.user.models import User


class Repository(ABC):
    """Storage backend shared by all services.

    Lookups return None for missing records; services decide which error to raise.
    Wallet addresses passed in are already in canonical checksum form.
    """

    async def on_start(self) -> None:
        """Prepare the backend (indexes, connections)."""

    async def on_stop(self) -> None:
        """Release backend resources."""

    # === Users ===
    @abstractmethod
    async def get_user(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    async def get_user_by_wallet(self, wallet_address: str) -> User | None: ...

    @abstractmethod
    async def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, User]: ...

    @abstractmethod
    async def upsert_user_nonce(self, wallet_address: str, nonce: str, is_admin: bool = False) -> User:
        """Set the pending nonce, creating the user if the wallet is unseen.

        `is_admin` only applies when the record is created. Overwrites any
        earlier pending nonce.
        """

    @abstractmethod
    async def clear_nonce_if_matches(self, user_id: UUID, nonce: str) -> bool:
        """Atomically clear the pending nonce if it still equals `nonce`.

        Returns False when another caller already consumed or replaced it.
        """

    @abstractmethod
    async def set_admin(self, wallet_address: str, is_admin: bool) -> User:
        """Set the admin flag, creating the user if the wallet is unseen."""

    # === Files ===
    @abstractmethod
    async def get_file(self, file_id: UUID) -> FileRecord | None: ...

    @abstractmethod
    async def get_file_by_cid(self, cid: str) -> FileRecord | None: ...

    @abstractmethod
    async def list_files_by_user(self, user_id: UUID) -> list[FileRecord]:
        """Files owned by the user, newest first."""

    @abstractmethod
    async def list_all_files(self) -> list[FileRecord]:
        """All files, newest first."""

    @abstractmethod
    async def insert_file(self, file: FileRecord) -> FileRecord: ...

    @abstractmethod
    async def delete_file(self, file_id: UUID) -> bool: ...

    # === Audit ===
    @abstractmethod
    async def insert_audit_record(self, record: AuditRecord) -> AuditRecord: ...

    @abstractmethod
    async def list_audit_records(self, limit: int) -> list[AuditRecord]:
        """Most recent records, newest first."""
