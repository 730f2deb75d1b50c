from datetime import datetime
from uuid import UUID

from pydantic import Field

from chainvault.core.db import ApiModel, MongoModel
from chainvault.utils import now


class FileRecord(MongoModel):
    """Metadata for a file pinned to the storage network, owned by one user."""

    user_id: UUID
    cid: str  # Content identifier returned by the pinning service
    filename: str  # Original filename from user
    file_size: int  # File size in bytes
    file_type: str  # Content type (e.g., "image/png")
    uploaded_at: datetime = Field(default_factory=now)


class FileView(ApiModel):
    """File metadata (API representation)."""

    id: UUID = Field(..., description="File ID")
    user_id: UUID = Field(..., description="Owner user ID")
    cid: str = Field(..., description="Content identifier on the storage network")
    filename: str = Field(..., description="Original filename")
    file_size: int = Field(..., description="File size in bytes")
    file_type: str = Field(..., description="MIME type")
    uploaded_at: datetime = Field(..., description="Upload timestamp")

    @classmethod
    def from_domain(cls, file: FileRecord) -> "FileView":
        return cls(
            id=file.id,
            user_id=file.user_id,
            cid=file.cid,
            filename=file.filename,
            file_size=file.file_size,
            file_type=file.file_type,
            uploaded_at=file.uploaded_at,
        )


class AdminFileView(FileView):
    """File metadata joined with the owner's wallet address."""

    wallet_address: str = Field(..., description="Owner wallet address, or 'Unknown' if the owner is missing")

    @classmethod
    def from_owner(cls, file: FileRecord, wallet_address: str) -> "AdminFileView":
        return cls(**FileView.from_domain(file).model_dump(), wallet_address=wallet_address)


class DeleteFileResponse(ApiModel):
    success: bool = True
