"""
Dependency Container
====================

FastAPI dependencies resolving services from the DI container.
"""
from app.application.services.photo_service import PhotoService
from app.application.services.student_service import StudentService
from app.di.container import get_container
from app.infrastructure.db.mongo_connection import MongoConnectionManager


def get_mongo_connection_manager() -> MongoConnectionManager:
    """
    Get the process MongoDB connection manager.

    Returns:
        MongoConnectionManager instance
    """
    return get_container().get("mongo_connection")


async def get_student_service() -> StudentService:
    """
    Get student service instance (singleton), connecting to MongoDB first.

    Concurrent requests arriving before the connection is up all wait on the
    same connection attempt.

    Returns:
        StudentService instance
    """
    await get_mongo_connection_manager().connect()
    return get_container().get(StudentService)


def get_photo_service() -> PhotoService:
    """
    Get photo service instance (singleton).

    Returns:
        PhotoService instance
    """
    return get_container().get(PhotoService)
