"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .database_provider import DatabaseProvider
from .storage_provider import StorageProvider
from .repository_provider import RepositoryProvider
from .student_provider import StudentProvider

__all__ = [
    "DatabaseProvider",
    "StorageProvider",
    "RepositoryProvider",
    "StudentProvider",
]
