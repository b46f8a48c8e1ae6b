"""Pagination — page arithmetic and page-navigation tokens for listing views.

Invariants:
    - Pages are 1-indexed; offset = (page - 1) * page_size
    - Listing pages above MAX_PAGE are rejected, which keeps OFFSET binds small
    - total_pages = ceil(matching_rows / page_size), 0 when nothing matches
    - generate_pagination never returns more than 7 tokens

Design Decisions:
    - ITEMS_PER_PAGE is the single default; Settings.invoices_page_size overrides it
    - Gaps rendered as the literal "..." token so clients need no extra logic
"""

import math

ITEMS_PER_PAGE = 6
MAX_PAGE = 10_000
ELLIPSIS = "..."

PageToken = int | str


def page_offset(page: int, page_size: int = ITEMS_PER_PAGE) -> int:
    return (page - 1) * page_size


def total_pages(matching_rows: int, page_size: int = ITEMS_PER_PAGE) -> int:
    return math.ceil(matching_rows / page_size)


def generate_pagination(current_page: int, total: int) -> list[PageToken]:
    """Page tokens for navigation: all pages when few, else a windowed view with gaps."""
    if total <= 7:
        return list(range(1, total + 1))

    # Near the start: 1, 2, 3, ..., n-1, n
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, total - 1, total]

    # Near the end: 1, 2, ..., n-2, n-1, n
    if current_page >= total - 2:
        return [1, 2, ELLIPSIS, total - 2, total - 1, total]

    return [
        1, ELLIPSIS,
        current_page - 1, current_page, current_page + 1,
        ELLIPSIS, total,
    ]


def generate_y_axis(monthly_revenue: list[int]) -> tuple[list[str], int]:
    """Chart y-axis labels in $1K steps, top first, plus the top value."""
    highest = max(monthly_revenue, default=0)
    top_label = math.ceil(highest / 1000) * 1000
    labels = [f"${value // 1000}K" for value in range(top_label, -1, -1000)]
    return labels, top_label
