"""Folder hierarchy rules: validation, lookups, listing and visibility of file records."""

from typing import List, Optional

from common.constants import BYTE_BEARING_TYPES, FILE_TYPES, FOLDER_TYPE, PAGE_SIZE, ROOT_PARENT_ID
from common.logging_config import get_logger
from files_manager.exceptions import (
    MissingDataError,
    MissingNameError,
    MissingTypeError,
    ParentNotAFolderError,
    ParentNotFoundError,
)
from files_manager.repositories.file_repository import FileRecord, FileRepository
from files_manager.utils import normalize_parent_id, parse_page

logger = get_logger(__name__)


class FileTree:
    def __init__(self, file_repo: FileRepository = None):
        self.file_repo = file_repo or FileRepository()

    def validate_create(
        self,
        owner_id: str,
        name: Optional[str],
        type: Optional[str],
        data: Optional[str] = None,
        parent_id=None,
        is_public: Optional[bool] = None,
    ) -> FileRecord:
        """
        Check an upload request and build the unsaved record for it.

        Checks run in order: name, type, data, parent.

        Raises:
            MissingNameError, MissingTypeError, MissingDataError,
            ParentNotFoundError, ParentNotAFolderError
        """
        if not name:
            raise MissingNameError()
        if not type or type not in FILE_TYPES:
            raise MissingTypeError()
        if type in BYTE_BEARING_TYPES and not data:
            raise MissingDataError()

        parent_id = normalize_parent_id(parent_id)
        if parent_id != ROOT_PARENT_ID:
            parent = self.file_repo.get_by_id(parent_id)
            if parent is None:
                logger.info(f"Rejected upload of {name}: parent {parent_id} not found")
                raise ParentNotFoundError()
            if parent.type != FOLDER_TYPE:
                logger.info(f"Rejected upload of {name}: parent {parent_id} is a {parent.type}")
                raise ParentNotAFolderError()

        return FileRecord(
            user_id=owner_id,
            name=name,
            type=type,
            parent_id=parent_id,
            is_public=bool(is_public),
        )

    def insert(self, record: FileRecord) -> FileRecord:
        if record.type == FOLDER_TYPE:
            record.local_path = None
        return self.file_repo.insert(record)

    def find_by_id(self, file_id: str) -> Optional[FileRecord]:
        return self.file_repo.get_by_id(file_id)

    def find_by_id_for_owner(self, file_id: str, owner_id: str) -> Optional[FileRecord]:
        return self.file_repo.get_by_id_and_owner(file_id, owner_id)

    def list(self, parent_id=None, page=None) -> List[FileRecord]:
        """
        List one page of records under a parent, for every owner.

        Args:
            parent_id: Parent folder id; any root representation lists the root
            page: Zero-based page number; invalid values mean page 0

        Returns:
            Up to PAGE_SIZE records, empty past the last page
        """
        parent_id = normalize_parent_id(parent_id)
        page = parse_page(page)
        return self.file_repo.list_by_parent(parent_id, skip=page * PAGE_SIZE, limit=PAGE_SIZE)

    def set_public(self, file_id: str, owner_id: str, value: bool) -> Optional[FileRecord]:
        """
        Set the visibility of a record owned by owner_id.

        Returns:
            The updated record, or None when owner_id owns no such record
        """
        record = self.find_by_id_for_owner(file_id, owner_id)
        if record is None:
            return None

        if record.is_public != value:
            self.file_repo.set_public(file_id, value)
            record.is_public = value
            logger.info(f"File {file_id} is_public={value} [user_id={owner_id}]")

        return record
