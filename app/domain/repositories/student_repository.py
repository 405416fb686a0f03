"""
Student Repository Interface
============================

Abstract interface for student data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from app.domain.models.student import Student


class StudentRepository(ABC):
    """
    Abstract repository for student persistence operations.

    Implementations raise NotFoundError for missing records on mutations and
    DatabaseError / DatabaseConnectionError for driver failures.
    """

    @abstractmethod
    def new_id(self) -> str:
        """
        Allocate an identifier for a record that is about to be created.

        Returns:
            Opaque identifier string
        """
        pass

    @abstractmethod
    def find_many(
        self,
        search_term: Optional[str],
        sort_by: str,
        descending: bool,
        limit: int,
        offset: int,
    ) -> List[Student]:
        """
        Find students matching a free-text search term.

        Args:
            search_term: Case-insensitive substring matched against name, email
                and address; also matched against age when numeric
            sort_by: Field name to sort by
            descending: Sort direction
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of student entities
        """
        pass

    @abstractmethod
    def find_by_id(self, student_id: str) -> Optional[Student]:
        """
        Find a student by its ID.

        Returns:
            Student entity if found, None otherwise
        """
        pass

    @abstractmethod
    def create(self, student: Student) -> Student:
        """
        Create a new student. Timestamps are assigned here.

        Returns:
            Created student entity
        """
        pass

    @abstractmethod
    def update(self, student_id: str, changes: Dict[str, Any]) -> Student:
        """
        Apply a partial update.

        Args:
            student_id: Unique student identifier
            changes: Mapping of domain field name -> new value

        Returns:
            Updated student entity

        Raises:
            NotFoundError: If the student does not exist
        """
        pass

    @abstractmethod
    def delete(self, student_id: str) -> Student:
        """
        Delete a student.

        Returns:
            The deleted student entity

        Raises:
            NotFoundError: If the student does not exist
        """
        pass

    @abstractmethod
    def delete_many(self, student_ids: Sequence[str]) -> List[Student]:
        """
        Delete every existing student among the given IDs.

        Returns:
            The student entities that were actually removed
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Count all students."""
        pass
