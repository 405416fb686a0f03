"""
GraphQL Package
===============

Strawberry schema served at /graphql.
"""
from .router import GRAPHQL_PATH, create_graphql_router
from .schema import schema

__all__ = ["GRAPHQL_PATH", "create_graphql_router", "schema"]
