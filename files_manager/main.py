"""Entry point for the Files Manager service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from files_manager.config import FILES_API_HOST, FILES_API_PORT, FOLDER_PATH
from files_manager.database import get_db_connection, init_database
from files_manager.exceptions import (
    FilesManagerError,
    FolderHasNoContentError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from files_manager.routes.file_routes import router as file_router

logger = setup_logging('files_manager')

app = FastAPI(
    title="Files Manager",
    description="Token-authenticated file and folder storage API",
    version="1.0.0"
)


def _error_response(exc: FilesManagerError, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": exc.code}
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize database on application startup.
    """
    logger.info("Files Manager starting up...")
    init_database()
    logger.info(f"Database initialized, storing files under {FOLDER_PATH}")


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Unauthorized: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_401_UNAUTHORIZED)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Validation error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Not found: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_404_NOT_FOUND)


@app.exception_handler(FolderHasNoContentError)
async def folder_has_no_content_handler(request: Request, exc: FolderHasNoContentError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Folder content requested: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=exc.cause
    )
    return _error_response(exc, status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(FilesManagerError)
async def files_manager_error_handler(request: Request, exc: FilesManagerError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Files Manager error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(exc, status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "Files Manager API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "files_manager"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies the metadata database is reachable.
    """
    try:
        with get_db_connection() as conn:
            conn.execute("SELECT 1 FROM files LIMIT 1")
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    ready = db_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={"ready": ready, "database": db_status}
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "files_manager.main:app",
        host=FILES_API_HOST,
        port=FILES_API_PORT,
    )


if __name__ == "__main__":
    main()
