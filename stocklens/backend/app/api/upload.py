"""
Spreadsheet upload endpoint.

Accepts one workbook (first sheet, wide "Day N" layout), imports it
synchronously in the request and returns the number of daily facts upserted.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.config import settings
from app.dependencies import get_current_user
from app.schemas.upload import UploadResponse
from app.services.import_errors import ImportStoreError, MalformedUploadError
from app.services.import_service import ImportService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_workbook(
    file: Optional[UploadFile] = File(None),
    current_user_and_db: tuple = Depends(get_current_user),
):
    """
    Import a spreadsheet for the current user.

    400: no file, unreadable/empty workbook, or no usable daily rows (nothing persisted).
    500: database failure (the whole import is rolled back).
    """
    user, db = current_user_and_db
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large (limit {settings.MAX_UPLOAD_BYTES} bytes)",
        )

    logger.info(f"📤 Upload {file.filename!r} ({len(contents)} bytes) from user {user.id}")
    try:
        result = ImportService.import_file(db, user.id, file.filename, contents)
    except MalformedUploadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ImportStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return UploadResponse(
        success=True,
        message=f"Imported {result.imported} records successfully.",
        imported=result.imported,
        batch_id=result.batch_id,
    )
