"""
Student Service
===============

Application service that coordinates student-related operations.
This service orchestrates the student use cases.
"""
from typing import Any, Dict, List, Optional, Sequence

from app.application.services.photo_service import PhotoService
from app.application.use_cases.student.create_student import CreateStudentUseCase
from app.application.use_cases.student.delete_student import DeleteStudentsUseCase, DeleteStudentUseCase
from app.application.use_cases.student.get_student import GetStudentUseCase
from app.application.use_cases.student.search_students import SearchStudentsUseCase
from app.application.use_cases.student.update_student import UpdateStudentUseCase
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository


class StudentService:
    """
    Application service for student operations.

    This service coordinates multiple use cases and provides
    a high-level interface for student management.
    """

    def __init__(self, student_repository: StudentRepository, photo_service: PhotoService):
        """
        Initialize service with repository and photo service.

        Args:
            student_repository: Repository for student persistence
            photo_service: Media side-channel for photo assets
        """
        self._repository = student_repository
        self._search_use_case = SearchStudentsUseCase(student_repository)
        self._get_use_case = GetStudentUseCase(student_repository)
        self._create_use_case = CreateStudentUseCase(student_repository, photo_service)
        self._update_use_case = UpdateStudentUseCase(student_repository, photo_service)
        self._delete_use_case = DeleteStudentUseCase(student_repository, photo_service)
        self._delete_many_use_case = DeleteStudentsUseCase(student_repository, photo_service)

    def list_students(self, criteria: Optional[Dict[str, Any]] = None) -> List[Student]:
        """
        List students with optional search, sort and pagination.

        Args:
            criteria: search_term, sort_by, sort_order, limit, offset

        Returns:
            List of student entities
        """
        return self._search_use_case.execute(criteria)

    def get_student(self, student_id: str) -> Student:
        """
        Get a student by ID.

        Raises:
            NotFoundError: If the student does not exist
        """
        return self._get_use_case.execute(student_id)

    def create_student(self, data: Dict[str, Any]) -> Student:
        """Create a student from raw input fields."""
        return self._create_use_case.execute(data)

    def update_student(self, student_id: str, data: Dict[str, Any]) -> Student:
        """Apply a partial update to a student."""
        return self._update_use_case.execute(student_id, data)

    def delete_student(self, student_id: str) -> str:
        """Delete a student and its photo."""
        return self._delete_use_case.execute(student_id)

    def delete_students(self, student_ids: Sequence[str]) -> int:
        """
        Delete many students.

        Returns:
            Number of students actually removed
        """
        return self._delete_many_use_case.execute(student_ids)

    def count_students(self) -> int:
        return self._repository.count()
