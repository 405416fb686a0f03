"""
Upload Controller
=================

FastAPI controller for student photo upload and deletion. Paths are
confined to the /uploads/students/ prefix.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.api.v1.dependencies import get_photo_service
from app.application.dto.student_dto import PhotoDeleteRequest, PhotoDeleteResponse, PhotoUploadResponse
from app.application.services.photo_service import PhotoService
from app.core.errors import AppError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["uploads"])


@router.post(
    "",
    response_model=PhotoUploadResponse,
    summary="Upload a student photo",
    description="""
    Store a JPG/PNG photo (max 1MB) for a student.

    The file is saved as `{studentId}_{timestamp}_{token}_{studentName}.{ext}`.
    If `oldPhotoPath` is given, that photo is deleted (best-effort).
    """
)
async def upload_photo(
    file: Optional[UploadFile] = File(None),
    student_id: Optional[str] = Form(None, alias="studentId"),
    student_name: Optional[str] = Form(None, alias="studentName"),
    old_photo_path: Optional[str] = Form(None, alias="oldPhotoPath"),
    service: PhotoService = Depends(get_photo_service),
) -> PhotoUploadResponse:
    """Upload a photo file."""
    if file is None:
        logger.warning("Upload rejected: no file provided")
        raise ValidationError("No file provided", {"file": "No file provided"})

    try:
        content = await file.read()
        logger.info(
            "Upload request: file=%s size=%d type=%s student=%s",
            file.filename, len(content), file.content_type, student_id,
        )
        locator = await run_in_threadpool(
            service.store,
            content,
            file.content_type,
            student_id=student_id,
            student_name=student_name,
            previous=old_photo_path,
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload file: {e}"
        )

    logger.info("File uploaded successfully: %s", locator)
    return PhotoUploadResponse(filename=locator)


@router.post(
    "/delete",
    response_model=PhotoDeleteResponse,
    summary="Delete a student photo",
    description="Delete a stored photo. The path must start with /uploads/students/."
)
async def delete_photo(
    request: PhotoDeleteRequest,
    service: PhotoService = Depends(get_photo_service),
) -> PhotoDeleteResponse:
    """Delete a photo by path."""
    try:
        await run_in_threadpool(service.delete, request.photo_path)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Delete photo failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete photo: {e}"
        )
    return PhotoDeleteResponse()
