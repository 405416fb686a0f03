"""
Search Students Use Case
========================

Lists students with free-text search, sorting and pagination.
"""
from typing import Any, Dict, List, Optional

from app.application.dto.student_dto import StudentSearchRequest, validate_input
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository


class SearchStudentsUseCase:
    """Use case for listing students."""

    def __init__(self, student_repository: StudentRepository):
        self._repository = student_repository

    def execute(self, criteria: Optional[Dict[str, Any]] = None) -> List[Student]:
        """
        Execute the search.

        Args:
            criteria: Raw search parameters (search_term, sort_by, sort_order, limit, offset)

        Returns:
            Matching students

        Raises:
            ValidationError: If the search parameters are invalid
        """
        request = validate_input(StudentSearchRequest, criteria or {}, "Invalid search parameters")
        return self._repository.find_many(
            search_term=request.search_term,
            sort_by=request.sort_by,
            descending=request.descending,
            limit=request.limit,
            offset=request.offset,
        )
