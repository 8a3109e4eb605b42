"""File operation API routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, Response, status

from files_manager.schemas.files import FileResponse, UploadRequest
from files_manager.services.file_service import FileService

router = APIRouter(prefix="/files", tags=["Files"])


def get_file_service() -> FileService:
    """
    FastAPI dependency providing the file service.
    """
    return FileService()


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    request: UploadRequest,
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    Create a folder, file or image.

    Parameters:
        - name: Display name (required)
        - type: folder, file or image (required)
        - data: Base64 content (required for file and image)
        - isPublic: Initial visibility (default false)
        - parentId: Parent folder id (default 0, the root)
        - X-Token header (required)

    Raises:
        - 400: Missing name, type or data; invalid data; bad parent
        - 401: Invalid or missing token
        - 500: Bytes could not be stored
    """
    record = await file_service.upload(
        token=x_token,
        name=request.name,
        type=request.type,
        data=request.data,
        parent_id=request.parent_id,
        is_public=request.is_public,
    )
    return FileResponse.from_record(record)


@router.get("", response_model=List[FileResponse])
def list_files(
    parent_id: Optional[str] = Query(None, alias="parentId"),
    page: Optional[str] = Query(None),
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    List up to 20 records under a parent folder.

    Parameters:
        - parentId: Parent folder id (default 0, the root)
        - page: Zero-based page number (default 0)
        - X-Token header (required)

    Raises:
        - 401: Invalid or missing token
    """
    records = file_service.index(x_token, parent_id, page)
    return [FileResponse.from_record(record) for record in records]


@router.get("/{file_id}", response_model=FileResponse)
def show_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    Get a record owned by the caller.

    Raises:
        - 401: Invalid or missing token
        - 404: No such record owned by the caller
    """
    return FileResponse.from_record(file_service.show(x_token, file_id))


@router.put("/{file_id}/publish", response_model=FileResponse)
def publish_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    Make a record owned by the caller public.

    Raises:
        - 401: Invalid or missing token
        - 404: No such record owned by the caller
    """
    return FileResponse.from_record(file_service.publish(x_token, file_id))


@router.put("/{file_id}/unpublish", response_model=FileResponse)
def unpublish_file(
    file_id: str,
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    Make a record owned by the caller private.

    Raises:
        - 401: Invalid or missing token
        - 404: No such record owned by the caller
    """
    return FileResponse.from_record(file_service.unpublish(x_token, file_id))


@router.get("/{file_id}/data")
async def download_file(
    file_id: str,
    size: Optional[int] = Query(None),
    x_token: Optional[str] = Header(None),
    file_service: FileService = Depends(get_file_service),
):
    """
    Download the content of a file, or of one of its size variants.

    Public files need no token; private files require the owner's token.

    Raises:
        - 400: The record is a folder
        - 404: Not found, not visible to the caller, or content missing
    """
    _, content, content_type = await file_service.download(x_token, file_id, size)
    return Response(content=content, media_type=content_type)
