"""Paging and search helpers shared by the entity routers."""

from sqlalchemy import Select

MAX_PAGE_SIZE = 100
SEARCH_RESULT_LIMIT = 20


def paginate(stmt: Select, offset: int, limit: int | None) -> Select:
    """
    Apply offset/limit to an already ordered select.

    A missing limit returns everything after ``offset``.
    """
    stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


def search_condition(column, query: str):
    """Case-insensitive substring match, with LIKE wildcards in the query escaped."""
    return column.icontains(query.strip(), autoescape=True)
