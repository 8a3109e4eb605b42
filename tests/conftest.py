"""Shared pytest fixtures for all tests."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from files_manager.auth import token_key
from files_manager.database import init_database
from files_manager.repositories.token_repository import TokenRepository
from files_manager.repositories.user_repository import UserRepository
from files_manager.storage import StorageBackend


@pytest.fixture
def test_db(monkeypatch):
    """
    Create a temporary test database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        monkeypatch.setattr("files_manager.database.DATABASE_PATH", str(db_path))
        monkeypatch.setattr("files_manager.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def storage_dir(tmp_path):
    """
    Directory used as the blob storage root.
    """
    return tmp_path / "files_manager"


@pytest.fixture
def storage(storage_dir):
    return StorageBackend(base_directory=str(storage_dir))


def create_user_with_token(user_id: str, token: str, ttl_seconds=None):
    """
    Insert a user and map token to it in the token store.
    """
    user = UserRepository.create_user(
        user_id=user_id,
        email=f"{user_id}@example.com",
        created_at=datetime.utcnow(),
    )
    TokenRepository.set(token_key(token), user_id, ttl_seconds)
    return user


@pytest.fixture
def make_user(test_db):
    """
    Factory creating a user reachable through the given token.
    """
    return create_user_with_token


@pytest.fixture
def user_a(test_db):
    return create_user_with_token("user-a", "token-a")


@pytest.fixture
def user_b(test_db):
    return create_user_with_token("user-b", "token-b")
