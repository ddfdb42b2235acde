from datetime import datetime
from typing import List

from pydantic import BaseModel


class FileSummary(BaseModel):
    """One row of a search page"""
    id: int
    filename: str
    size_bytes: int
    mime_type: str
    created_at: datetime


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_files: int


class FileListResponse(BaseModel):
    files: List[FileSummary]
    pagination: PaginationInfo


class ErrorResponse(BaseModel):
    error: str
