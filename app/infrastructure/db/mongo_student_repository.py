"""
MongoDB Student Repository
==========================

Concrete implementation of StudentRepository using MongoDB.
"""
import logging
import math
import re
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.core.errors import DatabaseConnectionError, DatabaseError, NotFoundError
from app.domain.constants.student_fields import StudentFields
from app.domain.models.student import Student
from app.domain.repositories.student_repository import StudentRepository
from app.infrastructure.db.mongo_connection import (
    MongoConnectionManager,
    get_mongo_connection,
    is_connection_error,
)
from app.utils.datetime_utils import now

logger = logging.getLogger(__name__)

ReturnType = TypeVar("ReturnType")

# Domain attribute -> document key, for the fields a partial update may touch
_UPDATABLE_FIELDS = {
    "name": StudentFields.NAME,
    "email": StudentFields.EMAIL,
    "age": StudentFields.AGE,
    "address": StudentFields.ADDRESS,
    "photo": StudentFields.PHOTO,
}

# Plain decimal or exponent notation, plus 0x/0o/0b integer literals.
# No digit separators, no words like "inf" or "nan".
DECIMAL_TERM = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
RADIX_TERM = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


def parse_numeric_term(term: str) -> Optional[float]:
    """Read a search term as a number, or None if it is not a plain numeric literal."""
    if DECIMAL_TERM.match(term):
        number = float(term)
    elif RADIX_TERM.match(term):
        number = float(int(term, 0))
    else:
        return None
    return number if math.isfinite(number) else None


def _wrap_driver_errors(action: str) -> Callable[[Callable[..., ReturnType]], Callable[..., ReturnType]]:
    """Translate pymongo failures into application errors."""

    def decorator(func: Callable[..., ReturnType]) -> Callable[..., ReturnType]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ReturnType:
            try:
                return func(*args, **kwargs)
            except PyMongoError as error:
                if is_connection_error(error):
                    logger.error("MongoDB unreachable while trying to %s: %s", action, error)
                    raise DatabaseConnectionError(original_error=error) from error
                logger.error("Failed to %s: %s", action, error)
                raise DatabaseError(f"Failed to {action}", error) from error

        return wrapper

    return decorator


def _to_object_id(student_id: str) -> Optional[ObjectId]:
    """Parse an ID; malformed IDs cannot match any document."""
    try:
        return ObjectId(student_id)
    except (InvalidId, TypeError):
        return None


class MongoStudentRepository(StudentRepository):
    """
    MongoDB implementation of StudentRepository.

    The collection is resolved on every call so the repository can be built
    before the connection manager has connected.
    """

    def __init__(
        self,
        connection: Optional[MongoConnectionManager] = None,
        collection_name: str = "students",
    ):
        self._connection = connection or get_mongo_connection()
        self._collection_name = collection_name

    @property
    def _collection(self) -> Collection:
        return self._connection.get_collection(self._collection_name)

    def _to_entity(self, doc: dict) -> Student:
        """Convert MongoDB document to Student entity."""
        return Student(
            id=str(doc[StudentFields.MONGO_ID]),
            name=doc.get(StudentFields.NAME, ""),
            email=doc.get(StudentFields.EMAIL, ""),
            age=doc.get(StudentFields.AGE, 0),
            address=doc.get(StudentFields.ADDRESS, ""),
            photo=doc.get(StudentFields.PHOTO) or None,
            created_at=doc.get(StudentFields.CREATED_AT, now()),
            updated_at=doc.get(StudentFields.UPDATED_AT, now()),
        )

    def _to_document(self, student: Student) -> dict:
        """Convert Student entity to MongoDB document."""
        return {
            StudentFields.MONGO_ID: ObjectId(student.id),
            StudentFields.NAME: student.name,
            StudentFields.EMAIL: student.email,
            StudentFields.AGE: student.age,
            StudentFields.ADDRESS: student.address,
            StudentFields.PHOTO: student.photo,
            StudentFields.CREATED_AT: student.created_at,
            StudentFields.UPDATED_AT: student.updated_at,
        }

    @staticmethod
    def build_search_query(search_term: Optional[str]) -> Dict[str, Any]:
        """
        Build the filter for a free-text search.

        Text fields are matched by case-insensitive substring; a numeric term
        additionally matches the exact age.
        """
        if not search_term or not search_term.strip():
            return {}

        term = search_term.strip()
        pattern = re.escape(term)
        clauses: List[Dict[str, Any]] = [
            {field: {"$regex": pattern, "$options": "i"}}
            for field in StudentFields.SEARCHABLE_TEXT
        ]

        number = parse_numeric_term(term)
        if number is not None:
            clauses.append({StudentFields.AGE: int(number) if number.is_integer() else number})

        return {"$or": clauses}

    def new_id(self) -> str:
        return str(ObjectId())

    @_wrap_driver_errors("fetch students")
    def find_many(
        self,
        search_term: Optional[str],
        sort_by: str,
        descending: bool,
        limit: int,
        offset: int,
    ) -> List[Student]:
        """Find students matching the search term, sorted and paginated."""
        query = self.build_search_query(search_term)
        cursor = (
            self._collection.find(query)
            .sort(sort_by, DESCENDING if descending else ASCENDING)
            .skip(offset)
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in cursor]

    @_wrap_driver_errors("fetch student")
    def find_by_id(self, student_id: str) -> Optional[Student]:
        """Find a student by its ID."""
        object_id = _to_object_id(student_id)
        if object_id is None:
            return None
        doc = self._collection.find_one({StudentFields.MONGO_ID: object_id})
        return self._to_entity(doc) if doc else None

    @_wrap_driver_errors("create student")
    def create(self, student: Student) -> Student:
        """Create a new student."""
        student.created_at = now()
        student.updated_at = student.created_at

        self._collection.insert_one(self._to_document(student))
        return student

    @_wrap_driver_errors("update student")
    def update(self, student_id: str, changes: Dict[str, Any]) -> Student:
        """Apply a partial update and return the stored result."""
        object_id = _to_object_id(student_id)
        if object_id is None:
            raise NotFoundError("Student", student_id)

        update_doc = {
            _UPDATABLE_FIELDS[key]: value
            for key, value in changes.items()
            if key in _UPDATABLE_FIELDS
        }
        update_doc[StudentFields.UPDATED_AT] = now()

        result = self._collection.find_one_and_update(
            {StudentFields.MONGO_ID: object_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError("Student", student_id)
        return self._to_entity(result)

    @_wrap_driver_errors("delete student")
    def delete(self, student_id: str) -> Student:
        """Delete a student and return what was removed."""
        object_id = _to_object_id(student_id)
        doc = None
        if object_id is not None:
            doc = self._collection.find_one_and_delete({StudentFields.MONGO_ID: object_id})
        if not doc:
            raise NotFoundError("Student", student_id)
        return self._to_entity(doc)

    @_wrap_driver_errors("delete students")
    def delete_many(self, student_ids: Sequence[str]) -> List[Student]:
        """Delete every existing student among the given IDs."""
        object_ids = [oid for oid in (_to_object_id(sid) for sid in student_ids) if oid is not None]

        # One atomic delete per id: a record removed by another request in the
        # meantime comes back as None and is not counted
        removed: List[Student] = []
        for object_id in dict.fromkeys(object_ids):
            doc = self._collection.find_one_and_delete({StudentFields.MONGO_ID: object_id})
            if doc:
                removed.append(self._to_entity(doc))

        if len(removed) != len(object_ids):
            logger.info("Bulk delete removed %d of %d requested students", len(removed), len(object_ids))
        return removed

    @_wrap_driver_errors("count students")
    def count(self) -> int:
        return self._collection.count_documents({})

    def ensure_indexes(self) -> None:
        """Create the indexes used by sorting and search."""
        self._collection.create_index(StudentFields.EMAIL)
        self._collection.create_index(StudentFields.NAME)
        self._collection.create_index(StudentFields.CREATED_AT)
