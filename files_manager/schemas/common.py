"""Common schemas used across multiple endpoints."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models. Python side stays snake_case, JSON is camelCase."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str
