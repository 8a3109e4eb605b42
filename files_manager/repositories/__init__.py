"""Repository layer for database operations."""

from files_manager.repositories.file_repository import FileRecord, FileRepository
from files_manager.repositories.token_repository import TokenRepository
from files_manager.repositories.user_repository import User, UserRepository

__all__ = [
    "FileRecord",
    "FileRepository",
    "TokenRepository",
    "User",
    "UserRepository",
]
