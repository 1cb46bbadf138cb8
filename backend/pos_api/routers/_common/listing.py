"""
Uniform list query parameters.

- ``fields``: comma separated projection, ``-`` prefix excludes
- ``limit`` / ``skip``: optional, no limit when absent
- ``sortBy``: ``field:asc|desc``; ``createdAt`` descending when absent

Usage:
    @router.get("/products")
    def list_products(query: ListQuery = Depends(get_list_query)):
        ...
"""

from __future__ import annotations

from fastapi import Query

from ...repositories import DEFAULT_SORT, ListQuery, SortSpec

SORT_DIRECTIONS = {"asc": False, "desc": True}


def parse_fields(fields: str | None) -> list[str] | None:
    if not fields:
        return None
    names = [name.strip() for name in fields.split(",") if name.strip()]
    return names or None


def parse_sort(sort_by: str | None) -> SortSpec | None:
    """
    ``name:desc`` -> SortSpec("name", True). A missing or unknown direction
    disables sorting.
    """
    if sort_by is None or not sort_by.strip():
        return DEFAULT_SORT

    field, _, direction = sort_by.strip().partition(":")
    direction = direction.strip().lower()
    if not field or direction not in SORT_DIRECTIONS:
        return None
    return SortSpec(field.strip(), descending=SORT_DIRECTIONS[direction])


def parse_bool(value: str | None) -> bool | None:
    """``"true"`` / ``"false"``; anything else means no filter."""
    if value is None:
        return None
    return {"true": True, "false": False}.get(value.strip().lower())


def get_list_query(
    fields: str | None = Query(default=None, description="Comma separated projection"),
    limit: int | None = Query(default=None, ge=0, description="Maximum number of records"),
    skip: int | None = Query(default=None, ge=0, description="Number of records to skip"),
    sort_by: str | None = Query(default=None, alias="sortBy", description="field:asc|desc"),
) -> ListQuery:
    """FastAPI dependency building a ListQuery without resource filters."""
    return ListQuery(
        fields=parse_fields(fields),
        limit=limit,
        skip=skip,
        sort=parse_sort(sort_by),
    )


def get_fields(
    fields: str | None = Query(default=None, description="Comma separated projection"),
) -> list[str] | None:
    return parse_fields(fields)
