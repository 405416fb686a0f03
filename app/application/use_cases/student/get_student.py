"""
Get Student Use Case
====================
"""
from app.core.errors import NotFoundError, ValidationError
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository


class GetStudentUseCase:
    """Use case for fetching a single student."""

    def __init__(self, student_repository: StudentRepository):
        self._repository = student_repository

    def execute(self, student_id: str) -> Student:
        if not student_id or not student_id.strip():
            raise ValidationError("Student ID is required", {"id": "Student ID is required"})

        student = self._repository.find_by_id(student_id.strip())
        if student is None:
            raise NotFoundError("Student", student_id)
        return student
