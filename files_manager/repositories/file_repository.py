"""File metadata repository for database operations."""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from common.constants import PAGE_SIZE
from common.logging_config import get_logger
from files_manager.database import get_db_connection
from files_manager.utils import generate_uuid

logger = get_logger(__name__)

_COLUMNS = "file_id, user_id, name, type, is_public, parent_id, local_path, created_at"


@dataclass
class FileRecord:
    user_id: str
    name: str
    type: str
    parent_id: str
    is_public: bool = False
    local_path: Optional[str] = None
    file_id: Optional[str] = None
    created_at: Optional[datetime] = None


def _row_to_record(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        file_id=row["file_id"],
        user_id=row["user_id"],
        name=row["name"],
        type=row["type"],
        is_public=bool(row["is_public"]),
        parent_id=row["parent_id"],
        local_path=row["local_path"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class FileRepository:
    @staticmethod
    def insert(record: FileRecord) -> FileRecord:
        """
        Insert a new file record, assigning its id and creation time.

        Args:
            record: Unsaved record (file_id is ignored)

        Returns:
            The stored record
        """
        file_id = generate_uuid()
        created_at = datetime.utcnow()

        with get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"""
                    INSERT INTO files ({_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (file_id, record.user_id, record.name, record.type, int(record.is_public),
                     record.parent_id, record.local_path, created_at.isoformat())
                )
                conn.commit()
            except Exception as e:
                logger.error(f"Failed to insert file record {record.name}: {e}", exc_info=True)
                raise

        logger.debug(f"Inserted {record.type} record {file_id} [user_id={record.user_id}]")
        return FileRecord(
            file_id=file_id,
            user_id=record.user_id,
            name=record.name,
            type=record.type,
            is_public=record.is_public,
            parent_id=record.parent_id,
            local_path=record.local_path,
            created_at=created_at,
        )

    @staticmethod
    def get_by_id(file_id: str) -> Optional[FileRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_COLUMNS} FROM files WHERE file_id = ?", (file_id,))
            row = cursor.fetchone()

        return _row_to_record(row) if row else None

    @staticmethod
    def get_by_id_and_owner(file_id: str, user_id: str) -> Optional[FileRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_COLUMNS} FROM files WHERE file_id = ? AND user_id = ?",
                (file_id, user_id)
            )
            row = cursor.fetchone()

        return _row_to_record(row) if row else None

    @staticmethod
    def list_by_parent(parent_id: str, skip: int, limit: int = PAGE_SIZE) -> List[FileRecord]:
        """
        Return records under parent_id in insertion order.

        Args:
            parent_id: Parent folder id or the root sentinel
            skip: Number of matching records to skip
            limit: Maximum number of records to return
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_COLUMNS} FROM files
                WHERE parent_id = ?
                ORDER BY rowid
                LIMIT ? OFFSET ?
                """,
                (parent_id, limit, skip)
            )
            rows = cursor.fetchall()

        return [_row_to_record(row) for row in rows]

    @staticmethod
    def set_public(file_id: str, is_public: bool) -> None:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE files SET is_public = ? WHERE file_id = ?",
                (int(is_public), file_id)
            )
            conn.commit()
        logger.debug(f"Set is_public={is_public} on file {file_id}")
