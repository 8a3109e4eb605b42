"""User repository for database operations."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from files_manager.database import get_db_connection

logger = get_logger(__name__)


@dataclass
class User:
    user_id: str
    email: str
    created_at: datetime


class UserRepository:
    @staticmethod
    def create_user(user_id: str, email: str, created_at: datetime) -> User:
        logger.debug(f"Creating user: {email} [user_id={user_id}]")

        with get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (user_id, email, created_at) VALUES (?, ?, ?)",
                    (user_id, email, created_at.isoformat())
                )
                conn.commit()
                logger.info(f"User created successfully [user_id={user_id}]")
            except Exception as e:
                logger.error(f"Failed to create user {email}: {e}", exc_info=True)
                raise

        return User(user_id=user_id, email=email, created_at=created_at)

    @staticmethod
    def get_by_user_id(user_id: str) -> Optional[User]:
        logger.debug(f"Fetching user by user_id: {user_id}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT user_id, email, created_at FROM users WHERE user_id = ?",
                (user_id,)
            )
            row = cursor.fetchone()

            if row is None:
                logger.debug(f"User not found: {user_id}")
                return None

            return User(
                user_id=row["user_id"],
                email=row["email"],
                created_at=datetime.fromisoformat(row["created_at"]),
            )
