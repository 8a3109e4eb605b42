"""API routes package."""

from files_manager.routes.file_routes import router as file_router

__all__ = ["file_router"]
