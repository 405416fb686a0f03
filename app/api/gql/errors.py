"""
GraphQL Error Formatting
========================

Turns application errors raised by resolvers into a structured envelope:

    {"message": ..., "extensions": {"code": ..., "statusCode": ..., "fields": {...}}}
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from app.core.config import get_settings
from app.core.errors import AppError, DatabaseError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"
GENERIC_MESSAGE = "Internal server error"


def app_error_extensions(error: AppError) -> Dict[str, Any]:
    """Extensions payload for an application error."""
    extensions = error.to_dict()
    extensions.pop("message")
    return extensions


def format_error(error: GraphQLError) -> GraphQLError:
    """
    Rewrite one GraphQL error.

    - AppError: message + code/statusCode (+ fields for validation errors)
    - GraphQL syntax/validation errors (no original error): unchanged
    - anything else: INTERNAL_SERVER_ERROR, message hidden in production
    """
    original = error.original_error
    if original is None:
        return error

    if isinstance(original, AppError):
        message = original.message
        extensions = {**(error.extensions or {}), **app_error_extensions(original)}
    elif isinstance(original, GraphQLError):
        return error
    else:
        message = GENERIC_MESSAGE if get_settings().is_production else str(original) or GENERIC_MESSAGE
        extensions = {**(error.extensions or {}), "code": INTERNAL_ERROR_CODE, "statusCode": 500}

    return GraphQLError(
        message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=original,
        extensions=extensions,
    )


class AppErrorFormatter(SchemaExtension):
    """Schema extension applying format_error to every error of an operation."""

    def _process(self, errors: Optional[List[GraphQLError]]) -> Optional[List[GraphQLError]]:
        if not errors:
            return errors
        return [format_error(error) for error in errors]

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result is None:
            return
        # Incremental delivery wraps the first payload
        target = getattr(result, "initial_result", result)
        target.errors = self._process(target.errors)


@contextmanager
def translate_errors(message: str) -> Iterator[None]:
    """
    Let AppError through untouched and wrap anything else in DatabaseError.

    Args:
        message: Message of the DatabaseError raised for unexpected failures
    """
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        logger.exception(message)
        raise DatabaseError(message, e) from e
