"""Pydantic schemas for API requests and responses."""

from files_manager.schemas.common import CamelModel, ErrorResponse
from files_manager.schemas.files import FileResponse, UploadRequest

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "FileResponse",
    "UploadRequest",
]
