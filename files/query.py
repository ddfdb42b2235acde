"""SQL construction for the file search.

A :class:`SearchQuery` holds an ordered list of ``(template, argument)``
predicates. Placeholder numbers are assigned from list position when the SQL
text is rendered, so the ``$n`` in the text and the n-th entry of the argument
list cannot drift apart. The count query and the page query embed the same
rendered WHERE clause; the page query appends ``page_size`` and ``offset`` as
the two last arguments.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from config.settings import settings

BASE_TABLES = "FROM user_files uf JOIN physical_files pf ON uf.physical_file_hash = pf.hash"
SUMMARY_COLUMNS = "uf.id, uf.filename, pf.size_bytes, uf.mime_type, uf.created_at"
ORDER_BY = "ORDER BY uf.created_at DESC"


@dataclass(frozen=True)
class SearchFilter:
    name: str
    template: str
    transform: Optional[Callable[[str], Any]] = None

    def bind(self, value: str) -> Any:
        return self.transform(value) if self.transform else value


# Canonical order. Numeric and date values stay strings and are cast by the
# database, so a malformed value fails at the store.
SEARCH_FILTERS: Tuple[SearchFilter, ...] = (
    SearchFilter("filename", "uf.filename ILIKE {placeholder}", lambda value: f"%{value}%"),
    SearchFilter("mime_type", "uf.mime_type = {placeholder}"),
    SearchFilter("min_size_bytes", "pf.size_bytes >= {placeholder}::text::bigint"),
    SearchFilter("max_size_bytes", "pf.size_bytes <= {placeholder}::text::bigint"),
    SearchFilter("start_date", "uf.created_at >= {placeholder}::text::timestamptz"),
    SearchFilter("end_date", "uf.created_at <= {placeholder}::text::timestamptz"),
)

FILTER_NAMES = tuple(f.name for f in SEARCH_FILTERS)


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.page_size)


def _parse_int(value: Union[str, int, None]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_pagination(
    page: Union[str, int, None],
    page_size: Union[str, int, None],
    default_page_size: int = None,
    max_page_size: int = None,
) -> Pagination:
    """Falls back to page 1 and the default page size for absent or out-of-range input."""
    default_page_size = default_page_size or settings.DEFAULT_PAGE_SIZE
    max_page_size = max_page_size or settings.MAX_PAGE_SIZE

    page_number = _parse_int(page)
    if page_number is None or page_number < 1:
        page_number = 1

    size = _parse_int(page_size)
    if size is None or size < 1 or size > max_page_size:
        size = default_page_size

    return Pagination(page=page_number, page_size=size)


class SearchQuery:
    def __init__(self, user_id: int):
        # Ownership predicate is always first, so every statement is scoped to the caller
        self._predicates: List[Tuple[str, Any]] = [("uf.user_id = {placeholder}", user_id)]

    def add(self, template: str, argument: Any) -> "SearchQuery":
        self._predicates.append((template, argument))
        return self

    @property
    def args(self) -> List[Any]:
        return [argument for _, argument in self._predicates]

    def where_clause(self) -> str:
        return " AND ".join(
            template.format(placeholder=f"${position}")
            for position, (template, _) in enumerate(self._predicates, start=1)
        )

    def count_statement(self) -> Tuple[str, List[Any]]:
        sql = f"SELECT COUNT(*) {BASE_TABLES} WHERE {self.where_clause()}"
        return sql, self.args

    def page_statement(self, pagination: Pagination) -> Tuple[str, List[Any]]:
        args = self.args
        limit_position = len(args) + 1
        sql = (
            f"SELECT {SUMMARY_COLUMNS} {BASE_TABLES} WHERE {self.where_clause()} "
            f"{ORDER_BY} LIMIT ${limit_position} OFFSET ${limit_position + 1}"
        )
        return sql, args + [pagination.page_size, pagination.offset]


def build_search_query(user_id: int, filters: Mapping[str, Optional[str]]) -> SearchQuery:
    """Adds one predicate per non-empty filter, in canonical order regardless of mapping order."""
    query = SearchQuery(user_id)
    for search_filter in SEARCH_FILTERS:
        value = filters.get(search_filter.name)
        if value is None or value == "":
            continue
        query.add(search_filter.template, search_filter.bind(value))
    return query
