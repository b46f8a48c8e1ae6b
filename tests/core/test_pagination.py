"""Tests for page arithmetic, navigation tokens and chart y-axis labels."""

from dashboard.core.pagination import (
    ELLIPSIS, ITEMS_PER_PAGE, generate_pagination, generate_y_axis,
    page_offset, total_pages,
)


def test_default_page_size_is_six():
    assert ITEMS_PER_PAGE == 6


def test_total_pages_rounds_up():
    assert total_pages(13) == 3
    assert total_pages(12) == 2
    assert total_pages(1) == 1
    assert total_pages(0) == 0


def test_page_offset_is_zero_based_skip():
    assert page_offset(1) == 0
    assert page_offset(3) == 12
    assert page_offset(2, page_size=10) == 10


def test_pagination_lists_every_page_when_seven_or_fewer():
    assert generate_pagination(1, 5) == [1, 2, 3, 4, 5]
    assert generate_pagination(4, 7) == [1, 2, 3, 4, 5, 6, 7]
    assert generate_pagination(1, 0) == []


def test_pagination_near_start():
    assert generate_pagination(2, 10) == [1, 2, 3, ELLIPSIS, 9, 10]


def test_pagination_near_end():
    assert generate_pagination(9, 10) == [1, 2, ELLIPSIS, 8, 9, 10]


def test_pagination_in_the_middle_shows_neighbours():
    assert generate_pagination(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]


def test_y_axis_rounds_top_up_to_next_thousand():
    labels, top = generate_y_axis([2000, 4800, 1800])
    assert top == 5000
    assert labels == ["$5K", "$4K", "$3K", "$2K", "$1K", "$0K"]


def test_y_axis_for_empty_chart():
    assert generate_y_axis([]) == (["$0K"], 0)
