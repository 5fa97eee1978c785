"""
Pagination helpers for list endpoints.

Query parameters follow the ``page`` / ``size`` / ``sort=property,direction``
convention, and responses carry ``X-Total-Count`` plus an RFC 5988 ``Link``
header pointing at the neighbouring pages.
"""

from typing import Annotated

from fastapi import HTTPException, Query, status
from fastapi.datastructures import URL

from pessoa_api.models import SORTABLE_FIELDS, Page, PageRequest, SortDirection, SortOrder

HEADER_X_TOTAL_COUNT = "X-Total-Count"
HEADER_LINK = "Link"


def parse_sort(values: list[str]) -> list[SortOrder]:
    """Parse ``property,direction`` sort parameters, rejecting unknown properties."""
    orders: list[SortOrder] = []
    for value in values:
        parts = [part.strip() for part in value.split(",") if part.strip()]
        if not parts:
            continue
        direction = SortDirection.ASC
        if parts[-1].lower() in (SortDirection.ASC.value, SortDirection.DESC.value):
            direction = SortDirection(parts.pop().lower())
        for prop in parts:
            if prop not in SORTABLE_FIELDS:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid sort property '{prop}'",
                )
            orders.append(SortOrder(property=prop, direction=direction))
    return orders


def get_page_request(
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=2000)] = 20,
    sort: Annotated[list[str] | None, Query()] = None,
) -> PageRequest:
    """FastAPI dependency building a PageRequest from the query string."""
    return PageRequest(page=page, size=size, sort=parse_sort(sort or []))


def _prepare_link(url: URL, page_number: int, page_size: int, rel: str) -> str:
    target = str(url.include_query_params(page=page_number, size=page_size))
    target = target.replace(",", "%2C").replace(";", "%3B")
    return f'<{target}>; rel="{rel}"'


def generate_pagination_headers(url: URL, page: Page) -> dict[str, str]:
    """Build the total-count and Link headers for a page of results."""
    page_number = page.page
    page_size = page.size
    total_pages = page.total_pages

    links: list[str] = []
    if page_number < total_pages - 1:
        links.append(_prepare_link(url, page_number + 1, page_size, "next"))
    if page_number > 0:
        links.append(_prepare_link(url, page_number - 1, page_size, "prev"))
    last_page = total_pages - 1 if total_pages > 0 else 0
    links.append(_prepare_link(url, last_page, page_size, "last"))
    links.append(_prepare_link(url, 0, page_size, "first"))

    return {
        HEADER_X_TOTAL_COUNT: str(page.total),
        HEADER_LINK: ",".join(links),
    }
