from uuid import UUID

import structlog

from chainvault.core.core import Service
from chainvault.core.modules.audit.models import AuditAction
from chainvault.core.modules.file.models import AdminFileView, FileRecord
from chainvault.core.modules.file.utils import clean_filename
from chainvault.core.modules.pinning.client import PinningClient
from chainvault.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

UNKNOWN_OWNER = "Unknown"


class FileService(Service):
    """Manages pinned file records and their audit trail."""

    async def on_start(self) -> None:
        store = self.core.content_store
        if isinstance(store, PinningClient) and not store.is_configured:
            logger.warning("pinning_token_missing", detail="uploads will fail until CHAINVAULT_PINNING_API_TOKEN is set")

    async def upload_file(self, user_id: UUID, filename: str | None, content: bytes, mime_type: str | None) -> FileRecord:
        """Pin content and record it as owned by `user_id`.

        The record and its FILE_UPLOAD audit entry are written only after the
        pinning service returns a CID. If the audit entry cannot be written the
        record is removed again.

        Raises:
            ValidationError: If the file is empty or over the size limit
            UpstreamStorageError: If the pinning service fails
        """
        max_size = self.core.config.max_upload_size
        if not content:
            raise ValidationError("No file provided")
        if len(content) > max_size:
            raise ValidationError(f"File exceeds the {max_size} byte upload limit")

        filename = clean_filename(filename)
        cid = await self.core.content_store.store(content, filename)

        file = FileRecord(
            user_id=user_id,
            cid=cid,
            filename=filename,
            file_size=len(content),
            file_type=mime_type or "application/octet-stream",
        )
        await self.repository.insert_file(file)
        try:
            await self.core.services.audit.record(
                user_id, AuditAction.FILE_UPLOAD, file.id, {"filename": file.filename, "cid": cid}
            )
        except Exception:
            await self.repository.delete_file(file.id)
            raise

        logger.info("file_uploaded", file_id=file.id, user_id=user_id, cid=cid, size=file.file_size)
        return file

    async def list_user_files(self, user_id: UUID) -> list[FileRecord]:
        """Files owned by the user, newest first."""
        return await self.repository.list_files_by_user(user_id)

    async def delete_file(self, user_id: UUID, file_id: UUID | str) -> None:
        """Delete a file record owned by `user_id` and append a FILE_DELETE audit entry.

        `file_id` may be raw path text; anything that is not a UUID names no file.
        Of two concurrent deletes only the one that removes the record is audited.

        Raises:
            NotFoundError: If the file does not exist or is already deleted
            AccessDeniedError: If the file belongs to another user
        """
        file = await self.core.services.access.ensure_file_owner(user_id, _parse_file_id(file_id))
        if not await self.repository.delete_file(file.id):
            raise NotFoundError(f"File '{file.id}' not found")
        await self.core.services.audit.record(user_id, AuditAction.FILE_DELETE, file.id, {"filename": file.filename})
        logger.info("file_deleted", file_id=file.id, user_id=user_id)

    async def list_all_files_with_owners(self) -> list[AdminFileView]:
        """All files, newest first, each joined with its owner's wallet address."""
        files = await self.repository.list_all_files()
        owners = await self.core.services.user.get_wallet_addresses([file.user_id for file in files])
        return [AdminFileView.from_owner(file, owners.get(file.user_id, UNKNOWN_OWNER)) for file in files]


def _parse_file_id(file_id: UUID | str) -> UUID:
    if isinstance(file_id, UUID):
        return file_id
    try:
        return UUID(file_id)
    except ValueError as e:
        raise NotFoundError(f"File '{file_id}' not found") from e
