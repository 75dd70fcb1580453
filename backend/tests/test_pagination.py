import unittest

from sqlalchemy import select

from tests.support import DatabaseTestCase
from vetcare.core.pagination import (
    MAX_SEARCH_TERMS,
    ListQuery,
    apply_search,
    build_page_meta,
    page_response,
    paginate,
    search_terms,
)
from vetcare.db.models.owner import Owner


class PageMetaTestCase(unittest.TestCase):
    def test_total_pages_rounds_up(self) -> None:
        self.assertEqual(
            build_page_meta(45, 2, 20),
            {"totalCount": 45, "currentPage": 2, "totalPages": 3, "itemsPerPage": 20},
        )

    def test_empty_collection_has_zero_pages(self) -> None:
        self.assertEqual(build_page_meta(0, 1, 20)["totalPages"], 0)

    def test_offset(self) -> None:
        self.assertEqual(ListQuery(page=3, limit=10).offset, 20)

    def test_search_terms_are_capped(self) -> None:
        self.assertEqual(search_terms("  a  b "), ["a", "b"])
        self.assertEqual(len(search_terms("a b c d e f g")), MAX_SEARCH_TERMS)
        self.assertEqual(search_terms(None), [])

    def test_page_response_shape(self) -> None:
        body = page_response(["x"], 1, ListQuery())
        self.assertEqual(set(body), {"data", "meta"})


class PaginateTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        clinic = self.make_clinic()
        self.make_owner(clinic, first_name="Sara", last_name="Ali", address="Karrada, Baghdad")
        self.make_owner(clinic, first_name="Omar", last_name="Saleh", address="Erbil")
        self.make_owner(clinic, first_name="Noor", last_name="Hassan", address="Baghdad")

    def _names(self, search: str | None) -> set[str]:
        stmt = apply_search(select(Owner), search, [Owner.first_name, Owner.last_name, Owner.address])
        with self.Session() as db:
            rows, _ = paginate(db, stmt, ListQuery(limit=100))
        return {o.first_name for o in rows}

    def test_every_term_must_match_some_column(self) -> None:
        self.assertEqual(self._names("baghdad"), {"Sara", "Noor"})
        self.assertEqual(self._names("baghdad noor"), {"Noor"})
        self.assertEqual(self._names("erbil noor"), set())

    def test_blank_search_matches_everything(self) -> None:
        self.assertEqual(self._names(""), {"Sara", "Omar", "Noor"})

    def test_count_ignores_page_window(self) -> None:
        stmt = select(Owner).order_by(Owner.first_name)
        with self.Session() as db:
            rows, total = paginate(db, stmt, ListQuery(page=2, limit=2))
        self.assertEqual(total, 3)
        self.assertEqual([o.first_name for o in rows], ["Sara"])
