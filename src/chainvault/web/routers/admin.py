from fastapi import APIRouter

from chainvault.core.modules.audit.models import AuditRecordView
from chainvault.core.modules.file.models import AdminFileView
from chainvault.web.deps import AppDep, AuthTokenDep
from chainvault.web.openapi import ErrorResponse

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    403: {"model": ErrorResponse, "description": "Invalid token or admin access required"},
}


@router.get(
    "/files",
    summary="List all files",
    description="Get every user's files with the owner wallet address. Only accessible by admin users.",
    operation_id="adminListFiles",
    responses={200: {"description": "All files"}, **ADMIN_RESPONSES},
)
async def list_all_files(app: AppDep, auth_token: AuthTokenDep) -> list[AdminFileView]:
    return await app.get_all_files(auth_token)


@router.get(
    "/audit",
    summary="Recent audit log",
    description="Get the 50 most recent audit records, newest first. Only accessible by admin users.",
    operation_id="adminAuditLog",
    responses={200: {"description": "Audit records"}, **ADMIN_RESPONSES},
)
async def audit_log(app: AppDep, auth_token: AuthTokenDep) -> list[AuditRecordView]:
    return await app.get_audit_log(auth_token)
