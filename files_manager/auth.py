"""Resolution of X-Token values to authenticated users."""

from typing import Optional

from common.constants import TOKEN_KEY_PREFIX
from common.logging_config import get_logger
from files_manager.repositories.token_repository import TokenRepository
from files_manager.repositories.user_repository import User, UserRepository

logger = get_logger(__name__)


def token_key(token: str) -> str:
    """
    Build the token store key for a token.

    Args:
        token: Opaque token from the X-Token header

    Returns:
        Key in the form auth_<token>
    """
    return f"{TOKEN_KEY_PREFIX}{token}"


class AuthResolver:
    def __init__(self, token_repo: TokenRepository = None, user_repo: UserRepository = None):
        self.token_repo = token_repo or TokenRepository()
        self.user_repo = user_repo or UserRepository()

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a token to its user.

        Args:
            token: Token value, possibly None or empty

        Returns:
            The user, or None when the token is missing, unknown, expired,
            or maps to a user that no longer exists
        """
        if not token:
            return None

        user_id = self.token_repo.get(token_key(token))
        if user_id is None:
            logger.debug("Token not found in token store")
            return None

        user = self.user_repo.get_by_user_id(user_id)
        if user is None:
            logger.warning(f"Token maps to unknown user [user_id={user_id}]")
            return None

        return user
