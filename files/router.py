from typing import Optional

from fastapi import APIRouter, Depends, Query

from auth.dependencies import get_current_user_id
from .query import normalize_pagination
from .repository import FileStore, get_file_store
from .schemas import ErrorResponse, FileListResponse
from .service import search_files

router = APIRouter(tags=["files"])

ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}


@router.get(
    "/search",
    response_model=FileListResponse,
    responses=ERROR_RESPONSES,
    summary="Search the caller's files",
)
async def search(
    filename: Optional[str] = Query(None, description="Case-insensitive substring"),
    mime_type: Optional[str] = Query(None),
    min_size_bytes: Optional[str] = Query(None),
    max_size_bytes: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    # Strings, so bad input falls back to defaults instead of a 422
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Results per page, at most 100"),
    user_id: int = Depends(get_current_user_id),
    store: FileStore = Depends(get_file_store),
):
    """
    Returns the caller's files matching every supplied filter:
    - filename: substring, case-insensitive
    - mime_type: exact match
    - min_size_bytes / max_size_bytes: inclusive size bounds
    - start_date / end_date: inclusive bounds on upload time
    """
    filters = {
        "filename": filename,
        "mime_type": mime_type,
        "min_size_bytes": min_size_bytes,
        "max_size_bytes": max_size_bytes,
        "start_date": start_date,
        "end_date": end_date,
    }
    return await search_files(store, user_id, filters, normalize_pagination(page, page_size))


@router.get(
    "/files",
    response_model=FileListResponse,
    responses=ERROR_RESPONSES,
    summary="List the caller's files",
)
async def list_files(
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Results per page, at most 100"),
    user_id: int = Depends(get_current_user_id),
    store: FileStore = Depends(get_file_store),
):
    """Newest first, paginated like /search."""
    return await search_files(store, user_id, {}, normalize_pagination(page, page_size))
