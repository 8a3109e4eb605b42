"""Pydantic schemas for file operation endpoints."""

from typing import Optional, Union

from common.constants import ROOT_PARENT_ID
from files_manager.repositories.file_repository import FileRecord
from files_manager.schemas.common import CamelModel


class UploadRequest(CamelModel):
    """
    Request model for file upload.

    Fields are optional here; missing or invalid values are reported by
    FileTree validation with their own error codes.
    """
    name: Optional[str] = None
    type: Optional[str] = None
    data: Optional[str] = None
    is_public: Optional[bool] = False
    parent_id: Optional[Union[int, str]] = ROOT_PARENT_ID


class FileResponse(CamelModel):
    """Response model for a file record. The on-disk path is never exposed."""
    id: str
    user_id: str
    name: str
    type: str
    is_public: bool
    parent_id: str

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileResponse":
        return cls(
            id=record.file_id,
            user_id=record.user_id,
            name=record.name,
            type=record.type,
            is_public=record.is_public,
            parent_id=record.parent_id,
        )
