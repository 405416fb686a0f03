from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.student_repository import StudentRepository
from ...infrastructure.db.mongo_student_repository import MongoStudentRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets the connection manager from the database provider.
        """
        mongo_connection = container.get("mongo_connection")

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            StudentRepository,
            MongoStudentRepository(
                connection=mongo_connection,
                collection_name=get_settings().students_collection,
            )
        )
