"""
API v1 Package
===============

Version 1 REST controllers.
"""
from .upload_controller import router as upload_router

__all__ = ["upload_router"]
