"""File access service: upload, show, list, publish and download under authorization rules."""

from typing import List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from common.constants import FOLDER_TYPE
from common.logging_config import get_logger
from files_manager.auth import AuthResolver
from files_manager.exceptions import FolderHasNoContentError, NotFoundError, UnauthorizedError
from files_manager.job_queue import JobQueue
from files_manager.repositories.file_repository import FileRecord
from files_manager.repositories.user_repository import User
from files_manager.services.file_tree import FileTree
from files_manager.storage import StorageBackend
from files_manager.utils import content_type_for

logger = get_logger(__name__)


class FileService:
    def __init__(
        self,
        auth_resolver: AuthResolver = None,
        file_tree: FileTree = None,
        storage: StorageBackend = None,
        job_queue: JobQueue = None,
    ):
        self.auth_resolver = auth_resolver or AuthResolver()
        self.file_tree = file_tree or FileTree()
        self.storage = storage or StorageBackend()
        self.job_queue = job_queue or JobQueue()

    def _authenticate(self, token: Optional[str]) -> User:
        user = self.auth_resolver.resolve(token)
        if user is None:
            raise UnauthorizedError()
        return user

    async def upload(
        self,
        token: Optional[str],
        name: Optional[str],
        type: Optional[str],
        data: Optional[str] = None,
        parent_id=None,
        is_public: Optional[bool] = False,
    ) -> FileRecord:
        """
        Create a folder, file or image.

        Bytes are written before the metadata insert. A failed write leaves no
        record and enqueues no job; a crash between the two steps can leave an
        unreferenced blob on disk.

        Raises:
            UnauthorizedError: Token does not resolve to a user
            ValidationError: Request rejected by FileTree or undecodable data
            StorageError: Bytes could not be written
        """
        user = await run_in_threadpool(self._authenticate, token)
        record = await run_in_threadpool(
            self.file_tree.validate_create,
            owner_id=user.user_id,
            name=name,
            type=type,
            data=data,
            parent_id=parent_id,
            is_public=is_public,
        )

        if record.type == FOLDER_TYPE:
            created = await run_in_threadpool(self.file_tree.insert, record)
            logger.info(f"Created folder {created.file_id} [user_id={user.user_id}]")
            return created

        record.local_path = await self.storage.write(data)
        try:
            created = await run_in_threadpool(self.file_tree.insert, record)
        except Exception:
            logger.error(f"Metadata insert failed, blob left orphaned: {record.local_path}")
            raise

        await run_in_threadpool(
            self.job_queue.enqueue, {"userId": created.user_id, "fileId": created.file_id}
        )

        logger.info(f"Created {created.type} {created.file_id} [user_id={user.user_id}]")
        return created

    def show(self, token: Optional[str], file_id: str) -> FileRecord:
        user = self._authenticate(token)
        record = self.file_tree.find_by_id_for_owner(file_id, user.user_id)
        if record is None:
            raise NotFoundError()
        return record

    def index(self, token: Optional[str], parent_id=None, page=None) -> List[FileRecord]:
        """
        List a page of records under parent_id. Records of every owner are included.
        """
        self._authenticate(token)
        return self.file_tree.list(parent_id, page)

    def publish(self, token: Optional[str], file_id: str) -> FileRecord:
        return self._set_public(token, file_id, True)

    def unpublish(self, token: Optional[str], file_id: str) -> FileRecord:
        return self._set_public(token, file_id, False)

    def _set_public(self, token: Optional[str], file_id: str, value: bool) -> FileRecord:
        user = self._authenticate(token)
        record = self.file_tree.set_public(file_id, user.user_id, value)
        if record is None:
            raise NotFoundError()
        return record

    async def download(
        self,
        token: Optional[str],
        file_id: str,
        size: Optional[int] = None,
    ) -> Tuple[FileRecord, bytes, str]:
        """
        Return a record's bytes and inferred content type.

        The token is optional: a missing or invalid token makes the requester
        anonymous, which can still read public files.

        Returns:
            (record, content, content_type)

        Raises:
            NotFoundError: No such record, private and not owned by the requester,
                or bytes missing on disk
            FolderHasNoContentError: The record is a folder
        """
        record = await run_in_threadpool(self.file_tree.find_by_id, file_id)
        if record is None:
            raise NotFoundError()

        if record.type == FOLDER_TYPE:
            raise FolderHasNoContentError()

        requester = await run_in_threadpool(self.auth_resolver.resolve, token)
        is_owner = requester is not None and requester.user_id == record.user_id
        if not record.is_public and not is_owner:
            raise NotFoundError()

        content = await self.storage.read(record.local_path, size)
        return record, content, content_type_for(record.name)
