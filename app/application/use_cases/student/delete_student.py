"""
Delete Student Use Cases
========================

Single and bulk deletion. Photo assets of removed students are deleted
best-effort.
"""
import logging
from typing import List, Sequence

from app.application.services.photo_service import PhotoService
from app.core.errors import ValidationError
from app.domain.repositories.student_repository import StudentRepository

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Student deleted successfully"


class DeleteStudentUseCase:
    """Use case for deleting one student."""

    def __init__(self, student_repository: StudentRepository, photo_service: PhotoService):
        self._repository = student_repository
        self._photos = photo_service

    def execute(self, student_id: str) -> str:
        """
        Delete a student and its photo.

        Returns:
            Confirmation message

        Raises:
            ValidationError: If the ID is missing
            NotFoundError: If the student does not exist
        """
        if not student_id or not student_id.strip():
            raise ValidationError("Student ID is required", {"id": "Student ID is required"})

        deleted = self._repository.delete(student_id.strip())
        if deleted.has_photo():
            self._photos.discard(deleted.photo)

        logger.info("Student %s deleted", deleted.id)
        return DELETED_MESSAGE


class DeleteStudentsUseCase:
    """Use case for deleting many students at once."""

    def __init__(self, student_repository: StudentRepository, photo_service: PhotoService):
        self._repository = student_repository
        self._photos = photo_service

    def execute(self, student_ids: Sequence[str]) -> int:
        """
        Delete every existing student among the IDs.

        Unknown IDs are ignored.

        Returns:
            Number of students actually removed

        Raises:
            ValidationError: If no IDs are given
        """
        ids: List[str] = list(dict.fromkeys(sid.strip() for sid in student_ids if sid and sid.strip()))
        if not ids:
            raise ValidationError("At least one student ID is required", {"ids": "At least one student ID is required"})

        deleted = self._repository.delete_many(ids)
        for student in deleted:
            if student.has_photo():
                self._photos.discard(student.photo)

        logger.info("Bulk delete removed %d of %d requested students", len(deleted), len(ids))
        return len(deleted)
