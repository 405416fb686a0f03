"""
Student DTO
===========

Pydantic models validating student input at the mutation boundary, plus
the helper that turns pydantic failures into a field-keyed ValidationError.
"""
import re
from typing import Any, Dict, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ModelType = TypeVar("ModelType", bound=BaseModel)


def _check_name(value: str) -> str:
    if len(value) < 2:
        raise ValueError("Name must be at least 2 characters")
    if len(value) > 100:
        raise ValueError("Name must be less than 100 characters")
    return value


def _check_email(value: str) -> str:
    value = value.lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


def _check_age(value: int) -> int:
    if value < 1:
        raise ValueError("Age must be at least 1")
    if value > 120:
        raise ValueError("Age must be at most 120")
    return value


def _check_address(value: str) -> str:
    if len(value) < 5:
        raise ValueError("Address must be at least 5 characters")
    if len(value) > 500:
        raise ValueError("Address must be less than 500 characters")
    return value


class StudentFieldRules(BaseModel):
    """Shared per-field constraints for create and update DTOs."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_name(value)

    @field_validator("email", check_fields=False)
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_email(value)

    @field_validator("age", check_fields=False)
    @classmethod
    def validate_age(cls, value: Optional[int]) -> Optional[int]:
        return value if value is None else _check_age(value)

    @field_validator("address", check_fields=False)
    @classmethod
    def validate_address(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_address(value)


class StudentCreateRequest(StudentFieldRules):
    """DTO for creating a student. Every field except photo is required."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., description="Full name, 2-100 characters")
    email: str = Field(..., description="Email address, stored lowercased")
    age: int = Field(..., description="Age in years, 1-120")
    address: str = Field(..., description="Postal address, 5-500 characters")
    photo: Optional[str] = Field(None, description="Data URI of a new image, or an existing asset locator")


class StudentUpdateRequest(StudentFieldRules):
    """
    DTO for a partial update.

    Only the fields present in the input are validated and applied. For
    photo, an explicit null or empty string clears the current photo.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    address: Optional[str] = None
    photo: Optional[str] = None

    @field_validator("name", "email", "age", "address", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @model_validator(mode="after")
    def require_any_field(self) -> "StudentUpdateRequest":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly provided by the client."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class StudentSearchRequest(BaseModel):
    """
    DTO for listing/searching students.

    Accepts the camelCase names clients send (sortBy) as well as the Python
    names; validation errors are keyed by the camelCase name.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    search_term: Optional[str] = None
    sort_by: Literal["name", "email", "age", "address", "createdAt", "updatedAt"] = "name"
    sort_order: Literal["asc", "desc"] = "asc"
    limit: int = Field(50, ge=1, le=100)
    offset: int = Field(0, ge=0)

    @field_validator("sort_by", "sort_order", "limit", "offset", mode="before")
    @classmethod
    def default_when_null(cls, value: Any, info: ValidationInfo) -> Any:
        # GraphQL clients send explicit nulls for unset variables
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"


class PhotoDeleteRequest(BaseModel):
    """DTO for the REST photo delete endpoint."""
    photo_path: Optional[str] = Field(None, alias="photoPath")


class PhotoUploadResponse(BaseModel):
    """DTO for a stored photo."""
    filename: str
    success: bool = True


class PhotoDeleteResponse(BaseModel):
    """DTO for a deleted photo."""
    success: bool = True
    message: str = "Photo deleted successfully"


def validate_input(model: Type[ModelType], data: Dict[str, Any], message: str) -> ModelType:
    """
    Validate raw input against a DTO.

    Every failing field is reported, but only its first violation is kept.

    Args:
        model: DTO class to validate with
        data: Raw field values
        message: Top-level error message on failure

    Returns:
        Validated DTO instance

    Raises:
        ValidationError: With a field -> message map
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        fields: Dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "input"
            if field not in fields:
                fields[field] = error["msg"].removeprefix("Value error, ")
        raise ValidationError(message, fields) from e
