"""
GraphQL Schema
==============
"""
import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.types import ExecutionContext

from app.api.gql.errors import AppErrorFormatter
from app.api.gql.resolvers import Mutation, Query
from app.core.errors import AppError

logger = logging.getLogger(__name__)


class StudentSchema(strawberry.Schema):
    """Schema that keeps expected client errors out of the error log."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, AppError) and original.status_code < 500:
                logger.info("GraphQL %s: %s", original.code, original.message)
            elif isinstance(original, AppError):
                logger.error("GraphQL %s: %s", original.code, original.message)
            elif original is None:
                logger.info("GraphQL request error: %s", error.message)
            else:
                logger.error("Unexpected GraphQL error", exc_info=original)


schema = StudentSchema(query=Query, mutation=Mutation, extensions=[AppErrorFormatter])
