"""
SQLite-backed job queue for deferred file processing.

Producers enqueue {userId, fileId} payloads and return immediately; a
separate worker polls pending jobs and marks them processed. Delivery is
at-least-once: a worker that crashes before mark_processed sees the job again.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List

from common.logging_config import get_logger
from files_manager.config import FILE_QUEUE_NAME
from files_manager.database import get_db_connection
from files_manager.utils import generate_uuid

logger = get_logger(__name__)


@dataclass(frozen=True)
class Job:
    job_id: str
    queue_name: str
    payload: Dict
    created_at: str


class JobQueue:
    def __init__(self, name: str = FILE_QUEUE_NAME):
        self.name = name

    def enqueue(self, payload: Dict) -> str:
        """
        Add a job to the queue.

        Args:
            payload: JSON-serialisable job body

        Returns:
            Generated job id
        """
        job_id = generate_uuid()
        created_at = datetime.utcnow().isoformat()

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO jobs (job_id, queue_name, payload, processed, created_at)
                VALUES (?, ?, ?, 0, ?)
                """,
                (job_id, self.name, json.dumps(payload), created_at)
            )
            conn.commit()

        logger.info(f"Enqueued job {job_id} on {self.name}")
        return job_id

    def get_pending(self, limit: int = 100) -> List[Job]:
        """
        Return unprocessed jobs, oldest first.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT job_id, queue_name, payload, created_at
                FROM jobs
                WHERE queue_name = ? AND processed = 0
                ORDER BY rowid
                LIMIT ?
                """,
                (self.name, limit)
            )
            rows = cursor.fetchall()

        return [
            Job(
                job_id=row["job_id"],
                queue_name=row["queue_name"],
                payload=json.loads(row["payload"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def mark_processed(self, job_id: str) -> bool:
        """
        Mark a job as processed.

        Returns:
            True if a pending job was updated, False otherwise
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE jobs SET processed = 1 WHERE job_id = ? AND processed = 0",
                (job_id,)
            )
            conn.commit()
            updated = cursor.rowcount > 0

        logger.debug(f"Marked job {job_id} processed: {updated}")
        return updated
