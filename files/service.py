import logging
from typing import Mapping, Optional

from pydantic import ValidationError

from .exceptions import RowDecodeFailure
from .query import Pagination, build_search_query
from .repository import FileStore
from .schemas import FileListResponse, FileSummary, PaginationInfo

logger = logging.getLogger(__name__)


async def search_files(
    store: FileStore,
    user_id: int,
    filters: Mapping[str, Optional[str]],
    pagination: Pagination,
) -> FileListResponse:
    """Counts the caller's matching files, then fetches one page of them newest first.

    The count runs first; if it fails the page query is never issued. A row
    that does not decode discards the whole page.
    """
    query = build_search_query(user_id, filters)

    count_sql, count_args = query.count_statement()
    total_files = await store.count(count_sql, count_args)

    page_sql, page_args = query.page_statement(pagination)
    rows = await store.fetch(page_sql, page_args)

    files = []
    for row in rows:
        try:
            files.append(FileSummary.model_validate(dict(row)))
        except (ValidationError, TypeError, ValueError) as e:
            logger.error(f"Failed to decode search result: {str(e)}")
            raise RowDecodeFailure("Failed to process filtered file data") from e

    return FileListResponse(
        files=files,
        pagination=PaginationInfo(
            current_page=pagination.page,
            total_pages=pagination.total_pages(total_files),
            total_files=total_files,
        ),
    )
