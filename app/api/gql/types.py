"""
GraphQL Types
=============

Strawberry object and input types for students.
"""
from typing import Any, Dict, Optional

import strawberry

from app.domain.models.student import Student
from app.utils.datetime_utils import to_iso


@strawberry.type(name="Student")
class StudentType:
    id: strawberry.ID
    name: Optional[str]
    email: Optional[str]
    age: Optional[int]
    address: Optional[str]
    photo: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, student: Student) -> "StudentType":
        return cls(
            id=strawberry.ID(student.id),
            name=student.name,
            email=student.email,
            age=student.age,
            address=student.address,
            photo=student.photo,
            created_at=to_iso(student.created_at),
            updated_at=to_iso(student.updated_at),
        )


def _provided(obj: Any, names: tuple) -> Dict[str, Any]:
    """Collect the input fields the client actually sent."""
    return {
        name: getattr(obj, name)
        for name in names
        if getattr(obj, name) is not strawberry.UNSET
    }


@strawberry.input(name="NewStudentInput")
class NewStudentInput:
    name: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    age: Optional[int] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    photo: Optional[str] = strawberry.UNSET

    def to_dict(self) -> Dict[str, Any]:
        return _provided(self, ("name", "email", "age", "address", "photo"))


@strawberry.input(name="SearchStudentInput")
class SearchStudentInput:
    search_term: Optional[str] = strawberry.UNSET
    sort_by: Optional[str] = strawberry.UNSET
    sort_order: Optional[str] = strawberry.UNSET
    limit: Optional[int] = strawberry.UNSET
    offset: Optional[int] = strawberry.UNSET

    def to_dict(self) -> Dict[str, Any]:
        return _provided(self, ("search_term", "sort_by", "sort_order", "limit", "offset"))
