"""
Info API — Paging Parameters & Pagination Headers
==================================================

What:  Turns ?page=&size=&sort= into a PageRequest, and a Page back into
       X-Total-Count and Link response headers.

Query format:
    page   zero-based page index (default 0); capped so page * size stays
           within a BIGINT offset
    size   page size (default settings.default_page_size, clamped to
           settings.max_page_size)
    sort   repeatable; "property[,property...][,asc|desc]"
           e.g. ?sort=name,desc&sort=id

Link header (RFC 5988):
    <http://host/api/themas?page=1&size=20>; rel="next",<...>; rel="prev",
    <...>; rel="last",<...>; rel="first"

    next is omitted on the last page, prev on the first. last points at
    page 0 when the result set is empty.
"""

from typing import Dict, List, Optional

from fastapi import Query
from starlette.datastructures import URL

from info_api.config import settings
from info_api.repositories.base import Page
from info_api.schemas.common import INT64_MAX, Direction, PageRequest, SortOrder

HEADER_X_TOTAL_COUNT = "X-Total-Count"
HEADER_LINK_FORMAT = '<{}>; rel="{}"'
MAX_PAGE_INDEX = INT64_MAX // settings.max_page_size


def parse_sort(values: List[str]) -> List[SortOrder]:
    """
    Parse repeated `sort` query values into SortOrder terms.

    A trailing asc/desc token applies to every property in the same value.
    Blank values and values holding only a direction are ignored.
    """
    orders: List[SortOrder] = []
    for value in values:
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        direction = Direction.ASC
        if tokens and tokens[-1].lower() in (Direction.ASC.value, Direction.DESC.value):
            direction = Direction(tokens.pop().lower())
        orders.extend(SortOrder(property=token, direction=direction) for token in tokens)
    return orders


def get_page_request(
    page: int = Query(default=0, ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    size: Optional[int] = Query(default=None, ge=1, description="Page size"),
    sort: List[str] = Query(
        default=[],
        description="Sort criteria: property[,property][,asc|desc]. Repeatable.",
    ),
) -> PageRequest:
    """FastAPI dependency building a PageRequest from the query string."""
    size = size or settings.default_page_size
    return PageRequest(
        page=page,
        size=min(size, settings.max_page_size),
        sort=parse_sort(sort),
    )


def _page_uri(url: URL, page_number: int, page_size: int) -> str:
    # "," and ";" are separators inside the Link header itself
    uri = str(url.include_query_params(page=page_number, size=page_size))
    return uri.replace(",", "%2C").replace(";", "%3B")


def _link(url: URL, page_number: int, page_size: int, rel: str) -> str:
    return HEADER_LINK_FORMAT.format(_page_uri(url, page_number, page_size), rel)


def generate_pagination_headers(url: URL, page: Page) -> Dict[str, str]:
    """
    Build X-Total-Count and Link headers describing `page` within its result set.

    Args:
        url:  The current request URL; sort and other params are preserved
        page: The page returned by the repository
    """
    links = []
    if page.has_next:
        links.append(_link(url, page.number + 1, page.size, "next"))
    if page.has_previous:
        links.append(_link(url, page.number - 1, page.size, "prev"))
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(_link(url, last_page, page.size, "last"))
    links.append(_link(url, 0, page.size, "first"))

    return {
        HEADER_X_TOTAL_COUNT: str(page.total),
        "Link": ",".join(links),
    }
