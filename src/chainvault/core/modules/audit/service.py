from typing import Any
from uuid import UUID

from chainvault.core.core import Service
from chainvault.core.modules.audit.models import AuditAction, AuditRecord

RECENT_AUDIT_LIMIT = 50


class AuditService(Service):
    """Append-only log of file-affecting actions."""

    async def record(
        self, user_id: UUID, action: AuditAction, file_id: UUID | None = None, metadata: dict[str, Any] | None = None
    ) -> AuditRecord:
        return await self.repository.insert_audit_record(
            AuditRecord(user_id=user_id, action=action, file_id=file_id, metadata=metadata)
        )

    async def recent(self, limit: int = RECENT_AUDIT_LIMIT) -> list[AuditRecord]:
        """Most recent audit records, newest first."""
        return await self.repository.list_audit_records(limit)
