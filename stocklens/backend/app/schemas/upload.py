"""
Upload (spreadsheet import) schemas
"""
from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Result of one spreadsheet import"""
    success: bool = True
    message: str
    imported: int
    batch_id: int = Field(..., serialization_alias="batchId")
