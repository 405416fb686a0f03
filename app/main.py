"""
FastAPI Application
===================

Main FastAPI app setup with all routes and middleware.
Serves: GraphQL (/graphql) → photo upload REST endpoints → static photos
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.gql import GRAPHQL_PATH, create_graphql_router
from app.api.gql.errors import app_error_extensions
from app.api.v1 import upload_router
from app.application.services.student_service import StudentService
from app.core.config import get_settings
from app.core.errors import AppError
from app.core.logging_config import setup_logging
from app.di.container import get_container
from app.domain.repositories.student_repository import StudentRepository
from app.domain.storage.photo_storage import PHOTO_PATH_PREFIX, PhotoStorage
from app.infrastructure.db.mongo_student_repository import MongoStudentRepository
from app.infrastructure.storage.local_photo_storage import LocalPhotoStorage

logger = logging.getLogger(__name__)


def app_error_response(request: Request, error: AppError) -> JSONResponse:
    """
    Render an AppError raised outside resolver execution.

    GraphQL requests get a GraphQL-shaped body so clients can handle every
    failure the same way; REST requests get {error, code, statusCode, fields?}.
    """
    extensions = app_error_extensions(error)
    if request.url.path.startswith(GRAPHQL_PATH):
        content = {"data": None, "errors": [{"message": error.message, "extensions": extensions}]}
    else:
        content = {"error": error.message, **extensions}
    return JSONResponse(status_code=error.status_code, content=content)


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Logging configuration
    - CORS middleware configuration
    - GraphQL and REST route registration
    - Static serving of locally stored photos
    - Startup/shutdown event handlers for the MongoDB connection

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    setup_logging()

    application = FastAPI(
        title="Student Management API",
        description="GraphQL API for managing student records and photos",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.exception_handler(AppError)
    async def handle_app_error(request: Request, error: AppError) -> JSONResponse:
        return app_error_response(request, error)

    # Register API routers
    application.include_router(create_graphql_router(enable_ide=not settings.is_production), prefix=GRAPHQL_PATH)
    application.include_router(upload_router, prefix="/api/upload")

    container = get_container()
    storage = container.get(PhotoStorage)
    if isinstance(storage, LocalPhotoStorage):
        storage.directory.mkdir(parents=True, exist_ok=True)
        application.mount(
            PHOTO_PATH_PREFIX.rstrip("/"),
            StaticFiles(directory=str(storage.directory)),
            name="student-photos",
        )

    @application.on_event("startup")
    async def startup_event():
        """
        Connect to MongoDB when FastAPI starts.

        A paused cluster must not keep the API from starting: on failure the
        connection is retried lazily by the first request.
        """
        connection = container.get("mongo_connection")
        try:
            await connection.connect()
        except AppError as e:
            logger.warning("MongoDB not available at startup (%s); will connect on first request", e.message)
            return

        repository = container.get(StudentRepository)
        if isinstance(repository, MongoStudentRepository):
            repository.ensure_indexes()
        logger.info("Student Management API started")

    @application.on_event("shutdown")
    async def shutdown_event():
        """Close the MongoDB connection when FastAPI shuts down."""
        await container.get("mongo_connection").close()
        logger.info("Student Management API stopped")

    @application.get("/")
    async def root():
        """Root endpoint - service info."""
        return {
            "status": "running",
            "service": "Student Management API",
            "version": "1.0.0",
            "graphql": GRAPHQL_PATH,
        }

    @application.get("/health")
    async def health():
        """Health check endpoint."""
        connection = container.get("mongo_connection")
        students = None
        if connection.is_connected():
            try:
                students = container.get(StudentService).count_students()
            except AppError as e:
                logger.warning("Health check could not count students: %s", e.message)
        return {
            "status": "healthy" if connection.is_connected() else "degraded",
            "environment": settings.environment,
            "database": connection.connection_info(),
            "students": students,
        }

    return application


# Create application instance
app = create_application()


def run() -> None:
    """Serve the API with uvicorn (console entry point)."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=not get_settings().is_production)
