"""
API/Presentation Layer
======================

HTTP API layer using FastAPI.
This layer handles HTTP requests and responses.

Contains:
- graphql: Strawberry schema, resolvers and error formatting for /graphql
- v1: REST controllers (photo upload/delete) and FastAPI dependencies
"""
