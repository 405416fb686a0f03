"""
Update Student Use Case
=======================

Business use case for a partial update of a student, including photo
replacement.
"""
import logging
from typing import Any, Dict

from app.application.dto.student_dto import StudentUpdateRequest, validate_input
from app.application.services.photo_service import PhotoService, is_data_uri
from app.core.errors import NotFoundError, ValidationError
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository

logger = logging.getLogger(__name__)


class UpdateStudentUseCase:
    """
    Use case for updating a student.

    Photo semantics:
    - field absent: photo unchanged
    - data URI: new asset stored, previous asset deleted
    - null or empty string: photo cleared, previous asset deleted
    - any other string: stored as the locator, previous asset deleted if different
    """

    def __init__(self, student_repository: StudentRepository, photo_service: PhotoService):
        self._repository = student_repository
        self._photos = photo_service

    def execute(self, student_id: str, data: Dict[str, Any]) -> Student:
        """
        Execute the update student use case.

        Args:
            student_id: Unique student identifier
            data: Raw input; only the keys present are applied

        Returns:
            Updated student entity

        Raises:
            ValidationError: If the ID is missing or input validation fails
            NotFoundError: If the student does not exist
        """
        if not student_id or not student_id.strip():
            raise ValidationError("Student ID is required", {"id": "Student ID is required"})
        student_id = student_id.strip()

        request = validate_input(StudentUpdateRequest, data, "Invalid student data")
        changes = request.changes()

        existing = self._repository.find_by_id(student_id)
        if existing is None:
            raise NotFoundError("Student", student_id)

        superseded = None
        stored_new_photo = False
        if "photo" in changes:
            photo = changes["photo"] or None
            if is_data_uri(photo):
                # Previous asset is removed only after the record points at the new one
                photo = self._photos.store_data_uri(photo, student_id, changes.get("name", existing.name))
                stored_new_photo = True
            changes["photo"] = photo
            if existing.photo and existing.photo != photo:
                superseded = existing.photo

        try:
            updated = self._repository.update(student_id, changes)
        except Exception:
            if stored_new_photo:
                self._photos.discard(changes["photo"])
            raise

        if superseded:
            self._photos.discard(superseded)

        logger.info("Student %s updated (%s)", student_id, ", ".join(sorted(changes)))
        return updated
