"""Manages stored file bytes on local disk: decode, write and read blobs."""

import base64
import binascii
from pathlib import Path
from typing import Optional

import aiofiles
from starlette.concurrency import run_in_threadpool

from common.logging_config import get_logger
from files_manager.config import FOLDER_PATH
from files_manager.exceptions import InvalidDataError, StorageError, StoredFileNotFoundError
from files_manager.utils import generate_uuid

logger = get_logger(__name__)


def variant_path(path: str, size: Optional[int] = None) -> str:
    """
    Get the path of a size variant of a stored file.

    Args:
        path: Path of the original blob
        size: Variant size, or None/0 for the original

    Returns:
        <path>_<size>, or path itself when no size is given
    """
    if not size:
        return path
    return f"{path}_{size}"


def decode_payload(data: str) -> bytes:
    """
    Decode a base64 upload payload.

    Standard and URL-safe alphabets are accepted, padding is optional and
    whitespace is ignored. Any other character rejects the payload.

    Raises:
        InvalidDataError: If data is not base64 or decodes to nothing
    """
    normalized = "".join(data.split()).replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)

    try:
        content = base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataError() from e

    if not content:
        raise InvalidDataError()
    return content


class StorageBackend:
    """
    Stores blobs as <base_directory>/<uuid>.
    """

    def __init__(self, base_directory: str = FOLDER_PATH):
        self.base_directory = Path(base_directory)

    async def write(self, data: str) -> str:
        """
        Decode base64 data and write it to a new blob.

        Args:
            data: Base64-encoded payload

        Returns:
            Full path of the written blob

        Raises:
            InvalidDataError: If data is not base64 or decodes to nothing
            StorageError: If the directory or blob cannot be written
        """
        content = decode_payload(data)
        filepath = self.base_directory / generate_uuid()

        try:
            await run_in_threadpool(self.base_directory.mkdir, parents=True, exist_ok=True)
            async with aiofiles.open(filepath, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to write blob {filepath}: {e}", exc_info=True)
            raise StorageError(f"Failed to store file: {e}", cause=e) from e

        logger.info(f"Stored {len(content)} bytes at {filepath}")
        return str(filepath)

    async def read(self, path: str, size: Optional[int] = None) -> bytes:
        """
        Read a blob or one of its size variants.

        Args:
            path: Path returned by write
            size: Optional size variant

        Returns:
            Raw blob bytes

        Raises:
            StoredFileNotFoundError: If the blob does not exist
            StorageError: If the blob exists but cannot be read
        """
        filepath = variant_path(path, size)
        try:
            async with aiofiles.open(filepath, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            logger.warning(f"Blob missing on disk: {filepath}")
            raise StoredFileNotFoundError() from e
        except IsADirectoryError as e:
            raise StoredFileNotFoundError() from e
        except OSError as e:
            logger.error(f"Failed to read blob {filepath}: {e}", exc_info=True)
            raise StorageError(f"Failed to read file: {e}", cause=e) from e
