import unittest

from ..errors import ValidationError
from ..models.pagination import (
    PageRequest,
    PageResult,
    SortDirection,
    SortSpec,
    next_sort,
    total_pages,
)


class TestSortCycle(unittest.TestCase):
    def test_unsorted_goes_ascending(self):
        self.assertEqual(next_sort(None, "amount"), SortSpec("amount", SortDirection.ASC))

    def test_ascending_goes_descending_then_off(self):
        asc = SortSpec("amount", SortDirection.ASC)
        desc = next_sort(asc, "amount")
        self.assertEqual(desc, SortSpec("amount", SortDirection.DESC))
        self.assertIsNone(next_sort(desc, "amount"))

    def test_new_field_restarts_ascending(self):
        desc = SortSpec("amount", SortDirection.DESC)
        self.assertEqual(next_sort(desc, "type"), SortSpec("type", SortDirection.ASC))

    def test_str_shows_arrow(self):
        self.assertEqual(str(SortSpec("amount")), "amount ↑")
        self.assertEqual(str(SortSpec("amount", SortDirection.DESC)), "amount ↓")


class TestPageRequest(unittest.TestCase):
    def test_for_page_computes_offset(self):
        request = PageRequest.for_page(3, 20)
        self.assertEqual(request.offset, 40)
        self.assertEqual(request.count, 20)
        self.assertEqual(request.page, 3)

    def test_blank_search_is_dropped(self):
        self.assertIsNone(PageRequest.for_page(1, 10, search_text="").search_text)
        self.assertEqual(PageRequest.for_page(1, 10, search_text="rent").search_text, "rent")

    def test_rejects_bad_ranges(self):
        with self.assertRaises(ValidationError):
            PageRequest(offset=0, count=0)
        with self.assertRaises(ValidationError):
            PageRequest(offset=-10, count=10)
        with self.assertRaises(ValidationError):
            PageRequest(offset=5, count=10)


class TestPageResult(unittest.TestCase):
    def test_negative_total_rejected(self):
        with self.assertRaises(ValidationError):
            PageResult(rows=[], total_matching=-1)


class TestTotalPages(unittest.TestCase):
    def test_total_pages(self):
        self.assertEqual(total_pages(0, 10), 1)
        self.assertEqual(total_pages(10, 10), 1)
        self.assertEqual(total_pages(11, 10), 2)
        self.assertEqual(total_pages(95, 20), 5)


if __name__ == "__main__":
    unittest.main()
