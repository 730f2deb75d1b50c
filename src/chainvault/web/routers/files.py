from fastapi import APIRouter, UploadFile

from chainvault.core.modules.file.models import DeleteFileResponse, FileView
from chainvault.web.deps import AppDep, AuthTokenDep
from chainvault.web.openapi import ErrorResponse

router = APIRouter(tags=["files"])


@router.get(
    "/files",
    summary="List my files",
    description="Get files uploaded by the current user, newest first.",
    operation_id="listFiles",
    responses={
        200: {"description": "List of files"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Invalid or expired token"},
    },
)
async def list_files(app: AppDep, auth_token: AuthTokenDep) -> list[FileView]:
    return await app.get_my_files(auth_token)


@router.post(
    "/files/upload",
    summary="Upload file",
    description="Pin a file (multipart field `file`, at most 10 MiB by default) and record it for the current user.",
    operation_id="uploadFile",
    status_code=201,
    responses={
        201: {"description": "File pinned and recorded"},
        400: {"model": ErrorResponse, "description": "Missing, empty, or oversized file"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Invalid or expired token"},
        500: {"model": ErrorResponse, "description": "Pinning service failed"},
    },
)
async def upload_file(file: UploadFile, app: AppDep, auth_token: AuthTokenDep) -> FileView:
    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    content = await file.read(app.max_upload_size + 1)
    return await app.upload_file(auth_token, file.filename, content, file.content_type)


@router.delete(
    "/files/{file_id}",
    summary="Delete file",
    description="Delete a file record owned by the current user.",
    operation_id="deleteFile",
    responses={
        200: {"description": "File deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Invalid token or file owned by another user"},
        404: {"model": ErrorResponse, "description": "File not found"},
    },
)
async def delete_file(file_id: str, app: AppDep, auth_token: AuthTokenDep) -> DeleteFileResponse:
    await app.delete_file(auth_token, file_id)
    return DeleteFileResponse(success=True)
