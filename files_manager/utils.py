"""Utility helper functions for the Files Manager."""

import mimetypes
import re
import uuid

from common.constants import ROOT_PARENT_ID

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def normalize_parent_id(parent_id) -> str:
    """
    Map any representation of the root (None, 0, "0", "") to the root sentinel.

    Args:
        parent_id: Raw parentId from a request

    Returns:
        The root sentinel or the parent id as a string
    """
    if parent_id is None or str(parent_id).strip() in ("", ROOT_PARENT_ID):
        return ROOT_PARENT_ID
    return str(parent_id)


def parse_page(page) -> int:
    """
    Parse the leading integer of a page query parameter ("2", "1.0", "3abc").

    Absent, non-numeric or negative values fall back to 0.
    """
    match = _LEADING_INT.match(str(page)) if page is not None else None
    if match is None:
        return 0
    return max(int(match.group(0)), 0)


def content_type_for(name: str) -> str:
    """
    Infer a Content-Type header value from a file name.

    Text types carry an explicit utf-8 charset.
    """
    mime_type, _ = mimetypes.guess_type(name)
    if mime_type is None:
        return DEFAULT_CONTENT_TYPE
    if mime_type.startswith("text/"):
        return f"{mime_type}; charset=utf-8"
    return mime_type
