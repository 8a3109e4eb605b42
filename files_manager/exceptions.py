"""Custom exception classes for the Files Manager."""


class FilesManagerError(Exception):
    """
    Base exception class for all Files Manager errors.
    """
    message = "Internal error"
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class UnauthorizedError(FilesManagerError):
    """
    Raised when the X-Token is missing, unknown, expired or maps to no user.
    """
    message = "Unauthorized"
    code = "UNAUTHORIZED"


class ValidationError(FilesManagerError):
    """
    Base class for rejected upload requests.
    """
    message = "Invalid request"
    code = "INVALID_REQUEST"


class MissingNameError(ValidationError):
    message = "Missing name"
    code = "MISSING_NAME"


class MissingTypeError(ValidationError):
    """
    Raised when the type is absent or not one of folder, file, image.
    """
    message = "Missing type"
    code = "MISSING_TYPE"


class MissingDataError(ValidationError):
    message = "Missing data"
    code = "MISSING_DATA"


class InvalidDataError(ValidationError):
    """
    Raised when the upload payload is not decodable base64 or decodes to nothing.
    """
    message = "Invalid data"
    code = "INVALID_DATA"


class ParentNotFoundError(ValidationError):
    message = "Parent not found"
    code = "PARENT_NOT_FOUND"


class ParentNotAFolderError(ValidationError):
    message = "Parent is not a folder"
    code = "PARENT_NOT_A_FOLDER"


class NotFoundError(FilesManagerError):
    """
    Raised when a record is absent, not owned by the caller, or private.
    """
    message = "Not found"
    code = "NOT_FOUND"


class StoredFileNotFoundError(NotFoundError):
    """
    Raised when the bytes of a file (or of its size variant) are missing on disk.
    """


class FolderHasNoContentError(FilesManagerError):
    """
    Raised when the content of a folder is requested.
    """
    message = "A folder doesn't have content"
    code = "FOLDER_HAS_NO_CONTENT"


class StorageError(FilesManagerError):
    """
    Raised when reading or writing file bytes fails for a reason other than absence.
    """
    message = "Storage error"
    code = "STORAGE_ERROR"

    def __init__(self, message: str = None, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
