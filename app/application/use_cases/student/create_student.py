"""
Create Student Use Case
=======================

Business use case for registering a new student:
validation -> (optional) photo storage -> persistence.
"""
import logging
from typing import Any, Dict

from app.application.dto.student_dto import StudentCreateRequest, validate_input
from app.application.services.photo_service import PhotoService, is_data_uri
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository

logger = logging.getLogger(__name__)


class CreateStudentUseCase:
    """
    Use case for creating a student.

    The record ID is allocated before anything is written so the photo file
    can be named after it. If persistence fails, a freshly written photo is
    removed again.
    """

    def __init__(self, student_repository: StudentRepository, photo_service: PhotoService):
        """
        Initialize use case with its collaborators.

        Args:
            student_repository: Repository for student persistence
            photo_service: Media side-channel for photo assets
        """
        self._repository = student_repository
        self._photos = photo_service

    def execute(self, data: Dict[str, Any]) -> Student:
        """
        Execute the create student use case.

        Args:
            data: Raw input fields (name, email, age, address, photo)

        Returns:
            Created student entity with server-assigned id and timestamps

        Raises:
            ValidationError: If input validation fails (nothing is persisted)
        """
        request = validate_input(StudentCreateRequest, data, "Invalid student data")
        student_id = self._repository.new_id()

        photo = request.photo or None
        stored_new_photo = False
        if is_data_uri(photo):
            photo = self._photos.store_data_uri(photo, student_id, request.name)
            stored_new_photo = True

        student = Student(
            id=student_id,
            name=request.name,
            email=request.email,
            age=request.age,
            address=request.address,
            photo=photo,
        )

        try:
            created = self._repository.create(student)
        except Exception:
            if stored_new_photo:
                self._photos.discard(photo)
            raise

        logger.info("Student %s created", created.id)
        return created
