from typing import TYPE_CHECKING
from ...domain.repositories.student_repository import StudentRepository
from ...application.services.photo_service import PhotoService
from ...application.services.student_service import StudentService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class StudentProvider:
    """Student service provider - registers student-related services"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register student service.
        Built lazily from the repository and photo service in the container.
        """
        container.register_lazy(
            StudentService,
            lambda: StudentService(
                student_repository=container.get(StudentRepository),
                photo_service=container.get(PhotoService),
            )
        )
