"""Project-wide constants (root sentinel, page size, file types)."""

ROOT_PARENT_ID: str = "0"

PAGE_SIZE: int = 20

FOLDER_TYPE: str = "folder"
FILE_TYPE: str = "file"
IMAGE_TYPE: str = "image"

FILE_TYPES: tuple = (FOLDER_TYPE, FILE_TYPE, IMAGE_TYPE)
BYTE_BEARING_TYPES: tuple = (FILE_TYPE, IMAGE_TYPE)

TOKEN_KEY_PREFIX: str = "auth_"
