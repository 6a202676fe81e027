"""Offset page math and page shapes."""

from thryv.core.pagination import CursorPage, OffsetPage, offset_for, total_pages_for


def test_offset_is_zero_for_first_page():
    assert offset_for(1, 10) == 0


def test_offset_for_later_pages():
    assert offset_for(2, 2) == 2
    assert offset_for(3, 25) == 50


def test_total_pages_rounds_up():
    assert total_pages_for(5, 2) == 3
    assert total_pages_for(4, 2) == 2


def test_total_pages_zero_when_empty():
    assert total_pages_for(0, 10) == 0


def test_offset_page_derives_total_pages():
    page = OffsetPage(items=["a", "b"], total=5, page=2, limit=2)
    assert page.total_pages == 3


def test_cursor_page_count_and_default_cursor():
    page = CursorPage(items=[1, 2, 3])
    assert page.count == 3
    assert page.next_cursor is None
