from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import Field

from chainvault.core.db import ApiModel, MongoModel
from chainvault.utils import now


class AuditAction(StrEnum):
    FILE_UPLOAD = "FILE_UPLOAD"
    FILE_DELETE = "FILE_DELETE"


class AuditRecord(MongoModel):
    """Append-only record of a file-affecting action."""

    user_id: UUID
    action: AuditAction
    file_id: UUID | None = None
    timestamp: datetime = Field(default_factory=now)
    metadata: dict[str, Any] | None = None


class AuditRecordView(ApiModel):
    """Audit record (API representation)."""

    id: UUID = Field(..., description="Audit record ID")
    user_id: UUID = Field(..., description="User who performed the action")
    action: AuditAction = Field(..., description="Action type")
    file_id: UUID | None = Field(None, description="Affected file, if any")
    timestamp: datetime = Field(..., description="When the action happened")
    metadata: dict[str, Any] | None = Field(None, description="Action details")

    @classmethod
    def from_domain(cls, record: AuditRecord) -> "AuditRecordView":
        return cls(
            id=record.id,
            user_id=record.user_id,
            action=record.action,
            file_id=record.file_id,
            timestamp=record.timestamp,
            metadata=record.metadata,
        )
