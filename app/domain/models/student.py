"""
Student Model
=============

Domain model representing a student record.
This is a pure domain object with no infrastructure dependencies.
"""
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from app.utils.datetime_utils import now


@dataclass
class Student:
    """
    Student domain model.

    Field constraints (name/email/age/address) are enforced at the mutation
    boundary by the request DTOs, not here.
    """
    id: str
    name: str
    email: str
    age: int
    address: str
    photo: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def has_photo(self) -> bool:
        """Check if a photo asset is attached."""
        return bool(self.photo)
