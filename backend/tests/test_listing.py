import unittest
from datetime import date

from vetcare.client.listing import (
    DEFAULT_PAGE_SIZE,
    ListState,
    Page,
    normalize_page,
    page_window,
    serialize_filters,
)
from vetcare.schemas.visit import VisitType


class SerializeFiltersTestCase(unittest.TestCase):
    def test_unset_values_are_dropped(self) -> None:
        self.assertEqual(serialize_filters({"page": 2, "search": "", "status": "ALL", "role": None}), {"page": 2})

    def test_page_is_always_present(self) -> None:
        self.assertEqual(serialize_filters({"search": "milo"}), {"page": 1, "search": "milo"})

    def test_false_and_zero_are_kept(self) -> None:
        params = serialize_filters({"isActive": False, "limit": 0})
        self.assertIs(params["isActive"], False)
        self.assertEqual(params["limit"], 0)

    def test_dates_and_enums_go_out_as_strings(self) -> None:
        params = serialize_filters({"startDate": date(2026, 1, 5), "visitType": VisitType.DENTAL})
        self.assertEqual(params["startDate"], "2026-01-05")
        self.assertEqual(params["visitType"], "dental")


class NormalizePageTestCase(unittest.TestCase):
    def test_meta_shape(self) -> None:
        page = normalize_page(
            {"data": [1, 2], "meta": {"totalCount": 12, "currentPage": 2, "totalPages": 6, "itemsPerPage": 2}}
        )
        self.assertEqual((page.page, page.limit, page.total_pages, page.total_count), (2, 2, 6, 12))
        self.assertEqual(page.items, [1, 2])

    def test_pagination_shape(self) -> None:
        page = normalize_page({"data": [], "pagination": {"total": 0, "page": 1, "limit": 20, "totalPages": 0}})
        self.assertEqual(page.total_pages, 1)
        self.assertTrue(page.is_empty)

    def test_both_shapes_normalize_alike(self) -> None:
        rows = [{"id": 1}, {"id": 2}]
        from_meta = normalize_page(
            {"data": rows, "meta": {"totalCount": 42, "currentPage": 3, "totalPages": 5, "itemsPerPage": 10}}
        )
        from_pagination = normalize_page(
            {"data": rows, "pagination": {"page": 3, "limit": 10, "totalPages": 5, "totalCount": 42}}
        )
        self.assertEqual(from_meta, from_pagination)
        self.assertEqual(from_meta, Page(items=rows, page=3, limit=10, total_pages=5, total_count=42))

    def test_empty_body_is_an_empty_page(self) -> None:
        page = normalize_page(None)
        self.assertTrue(page.is_empty)
        self.assertEqual((page.page, page.total_pages, page.total_count), (1, 1, 0))

    def test_missing_total_pages_reads_as_one(self) -> None:
        page = normalize_page({"data": ["a"], "meta": {"totalCount": 1}})
        self.assertEqual(page.total_pages, 1)
        self.assertEqual(page.limit, DEFAULT_PAGE_SIZE)

    def test_bare_list(self) -> None:
        page = normalize_page([{"id": 1}, {"id": 2}])
        self.assertEqual(page.total_count, 2)
        self.assertEqual(page.total_pages, 1)


class PageWindowTestCase(unittest.TestCase):
    def test_short_ranges_show_every_page(self) -> None:
        self.assertEqual(page_window(1, 3), [1, 2, 3])
        self.assertEqual(page_window(1, 0), [])

    def test_window_is_centered_and_clamped(self) -> None:
        self.assertEqual(page_window(1, 10), [1, 2, 3, 4, 5])
        self.assertEqual(page_window(5, 10), [3, 4, 5, 6, 7])
        self.assertEqual(page_window(6, 10), [4, 5, 6, 7, 8])
        self.assertEqual(page_window(10, 10), [6, 7, 8, 9, 10])


class ListStateTestCase(unittest.TestCase):
    def test_filter_change_resets_page(self) -> None:
        state = ListState()
        state.set_page(4)
        state.set_filter("search", "milo")
        self.assertEqual(state.page, 1)
        self.assertEqual(state.params(), {"page": 1, "limit": 20, "search": "milo"})

    def test_same_value_keeps_page(self) -> None:
        state = ListState(filters={"search": "milo"}, page=3)
        state.set_filter("search", "milo")
        self.assertEqual(state.page, 3)

    def test_page_change_keeps_filters(self) -> None:
        state = ListState(filters={"visitType": "dental"})
        state.set_filter("page", 2)
        self.assertEqual(state.params()["page"], 2)
        self.assertEqual(state.params()["visitType"], "dental")

    def test_limit_change_resets_page(self) -> None:
        state = ListState(page=5)
        state.set_limit(50)
        self.assertEqual((state.page, state.limit), (1, 50))
        with self.assertRaises(ValueError):
            state.set_limit(7)
