"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain entities and repositories.

Contains:
- Use Cases: Business operations (create, update, search and delete students)
- Services: StudentService coordinating the use cases, PhotoService for photo assets
"""

