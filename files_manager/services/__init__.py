"""Service layer for business logic."""

from files_manager.services.file_service import FileService
from files_manager.services.file_tree import FileTree

__all__ = [
    "FileService",
    "FileTree",
]
