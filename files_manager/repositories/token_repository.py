"""Key-value token store mapping auth_<token> keys to user ids."""

from datetime import datetime, timedelta
from typing import Optional

from common.logging_config import get_logger
from files_manager.database import get_db_connection

logger = get_logger(__name__)


class TokenRepository:
    @staticmethod
    def set(key: str, user_id: str, ttl_seconds: Optional[int] = None) -> None:
        """
        Store a key, replacing any previous value.

        Args:
            key: Store key, e.g. auth_<token>
            user_id: Value to map the key to
            ttl_seconds: Lifetime of the key; None keeps it forever
        """
        expires_at = None
        if ttl_seconds is not None:
            expires_at = (datetime.utcnow() + timedelta(seconds=ttl_seconds)).isoformat()

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO tokens (token_key, user_id, expires_at) VALUES (?, ?, ?)
                ON CONFLICT(token_key) DO UPDATE SET
                    user_id = excluded.user_id,
                    expires_at = excluded.expires_at
                """,
                (key, user_id, expires_at)
            )
            conn.commit()
        logger.debug(f"Stored key {key} (ttl={ttl_seconds})")

    @staticmethod
    def get(key: str) -> Optional[str]:
        """
        Return the value stored under key, or None if absent or expired.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT user_id, expires_at FROM tokens WHERE token_key = ?",
                (key,)
            )
            row = cursor.fetchone()

        if row is None:
            return None

        if row["expires_at"] and datetime.fromisoformat(row["expires_at"]) <= datetime.utcnow():
            logger.debug(f"Key {key} expired")
            return None

        return row["user_id"]
