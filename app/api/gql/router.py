"""
GraphQL Router
==============

Mounts the schema on FastAPI. The context getter connects to MongoDB (or
waits for the in-flight connection) before any resolver runs.
"""
from typing import Any, Dict

from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from app.api.gql.schema import schema
from app.api.v1.dependencies import get_student_service
from app.application.services.student_service import StudentService

GRAPHQL_PATH = "/graphql"


async def get_graphql_context(
    student_service: StudentService = Depends(get_student_service),
) -> Dict[str, Any]:
    return {"student_service": student_service}


def create_graphql_router(enable_ide: bool = True) -> GraphQLRouter:
    """
    Build the /graphql router.

    Args:
        enable_ide: Serve GraphiQL on GET requests from browsers
    """
    return GraphQLRouter(
        schema,
        context_getter=get_graphql_context,
        graphql_ide="graphiql" if enable_ide else None,
    )
