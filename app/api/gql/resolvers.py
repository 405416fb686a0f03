"""
GraphQL Resolvers
=================

Query and Mutation roots. Resolvers delegate to StudentService, which is
placed in the request context by the router's context getter.

StudentService talks to pymongo synchronously, so every call is handed to
the threadpool to keep the event loop free.
"""
from typing import List, Optional

import strawberry
from fastapi.concurrency import run_in_threadpool
from strawberry.types import Info

from app.api.gql.errors import translate_errors
from app.api.gql.types import NewStudentInput, SearchStudentInput, StudentType
from app.application.services.student_service import StudentService


def _service(info: Info) -> StudentService:
    return info.context["student_service"]


@strawberry.type
class Query:
    @strawberry.field(description="List students with optional search, sort and pagination")
    async def students(self, info: Info, input: Optional[SearchStudentInput] = None) -> List[StudentType]:
        criteria = input.to_dict() if input else {}
        with translate_errors("Failed to fetch students"):
            students = await run_in_threadpool(_service(info).list_students, criteria)
        return [StudentType.from_entity(student) for student in students]

    @strawberry.field(description="Get a student by ID")
    async def student(self, info: Info, id: strawberry.ID) -> Optional[StudentType]:
        with translate_errors("Failed to fetch student"):
            student = await run_in_threadpool(_service(info).get_student, str(id))
        return StudentType.from_entity(student)


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Create a student; photo may be a base64 data URI")
    async def create_student(self, info: Info, input: NewStudentInput) -> StudentType:
        with translate_errors("Failed to create student"):
            student = await run_in_threadpool(_service(info).create_student, input.to_dict())
        return StudentType.from_entity(student)

    @strawberry.mutation(description="Update the provided fields of a student")
    async def update_student(self, info: Info, id: strawberry.ID, input: NewStudentInput) -> StudentType:
        with translate_errors("Failed to update student"):
            student = await run_in_threadpool(_service(info).update_student, str(id), input.to_dict())
        return StudentType.from_entity(student)

    @strawberry.mutation(description="Delete a student and its photo")
    async def delete_student(self, info: Info, id: strawberry.ID) -> str:
        with translate_errors("Failed to delete student"):
            return await run_in_threadpool(_service(info).delete_student, str(id))

    @strawberry.mutation(description="Delete many students; returns how many were removed")
    async def delete_students(self, info: Info, ids: List[strawberry.ID]) -> int:
        with translate_errors("Failed to delete students"):
            return await run_in_threadpool(
                _service(info).delete_students,
                [str(student_id) for student_id in ids],
            )
