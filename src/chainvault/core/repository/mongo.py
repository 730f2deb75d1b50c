from collections.abc import Iterable
from typing import Any
from urllib.parse import urlparse
from uuid import UUID, uuid4

import structlog
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError

from chainvault.core.modules.audit.models import AuditRecord
from chainvault.core.modules.file.models import FileRecord
from chainvault.core.modules.user.models import User
from chainvault.core.repository.base import Repository
from chainvault.utils import now

logger = structlog.get_logger(__name__)


class MongoRepository(Repository):
    """MongoDB-backed repository.

    Users are keyed by a unique index on `wallet_address`. Nonce clearing is a
    single conditional `update_one`, so two logins racing on the same
    nonce cannot both win.
    """

    def __init__(self, database_url: str) -> None:
        self.mongo_client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(database_url, uuidRepresentation="standard")
        self.database = self.mongo_client.get_database(urlparse(database_url).path[1:])
        self._users = self.database.get_collection("users")
        self._files = self.database.get_collection("files")
        self._audit_logs = self.database.get_collection("audit_logs")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._users.create_index([("wallet_address", 1)], unique=True)
        await self._files.create_index([("user_id", 1), ("uploaded_at", -1)])
        await self._files.create_index([("uploaded_at", -1)])
        await self._files.create_index([("cid", 1)])
        await self._audit_logs.create_index([("timestamp", -1)])
        logger.debug("mongo_repository_started", database=self.database.name)

    async def on_stop(self) -> None:
        await self.mongo_client.aclose()

    # === Users ===
    async def get_user(self, user_id: UUID) -> User | None:
        doc = await self._users.find_one({"_id": user_id})
        return User.from_mongo(doc)

    async def get_user_by_wallet(self, wallet_address: str) -> User | None:
        doc = await self._users.find_one({"wallet_address": wallet_address})
        return User.from_mongo(doc)

    async def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        users = await User.list_cursor(self._users.find({"_id": {"$in": list(set(user_ids))}}))
        return {user.id: user for user in users}

    async def upsert_user_nonce(self, wallet_address: str, nonce: str, is_admin: bool = False) -> User:
        return await self._upsert_user(wallet_address, {"nonce": nonce}, {"is_admin": is_admin})

    async def clear_nonce_if_matches(self, user_id: UUID, nonce: str) -> bool:
        result = await self._users.update_one({"_id": user_id, "nonce": nonce}, {"$set": {"nonce": None}})
        return result.modified_count == 1

    async def set_admin(self, wallet_address: str, is_admin: bool) -> User:
        return await self._upsert_user(wallet_address, {"is_admin": is_admin}, {"nonce": None})

    async def _upsert_user(self, wallet_address: str, set_fields: dict[str, Any], insert_fields: dict[str, Any]) -> User:
        update = {
            "$set": set_fields,
            "$setOnInsert": {"_id": uuid4(), "created_at": now(), **insert_fields},
        }
        try:
            doc = await self._users.find_one_and_update(
                {"wallet_address": wallet_address}, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            # A concurrent upsert inserted the same wallet first; the record now exists
            doc = await self._users.find_one_and_update(
                {"wallet_address": wallet_address}, {"$set": set_fields}, return_document=ReturnDocument.AFTER
            )
        return User.model_validate(doc)

    # === Files ===
    async def get_file(self, file_id: UUID) -> FileRecord | None:
        doc = await self._files.find_one({"_id": file_id})
        return FileRecord.from_mongo(doc)

    async def get_file_by_cid(self, cid: str) -> FileRecord | None:
        doc = await self._files.find_one({"cid": cid})
        return FileRecord.from_mongo(doc)

    async def list_files_by_user(self, user_id: UUID) -> list[FileRecord]:
        return await FileRecord.list_cursor(self._files.find({"user_id": user_id}).sort("uploaded_at", -1))

    async def list_all_files(self) -> list[FileRecord]:
        return await FileRecord.list_cursor(self._files.find().sort("uploaded_at", -1))

    async def insert_file(self, file: FileRecord) -> FileRecord:
        await self._files.insert_one(file.to_mongo())
        return file

    async def delete_file(self, file_id: UUID) -> bool:
        result = await self._files.delete_one({"_id": file_id})
        return result.deleted_count == 1

    # === Audit ===
    async def insert_audit_record(self, record: AuditRecord) -> AuditRecord:
        await self._audit_logs.insert_one(record.to_mongo())
        return record

    async def list_audit_records(self, limit: int) -> list[AuditRecord]:
        if limit <= 0:
            return []
        return await AuditRecord.list_cursor(self._audit_logs.find().sort("timestamp", -1).limit(limit))
