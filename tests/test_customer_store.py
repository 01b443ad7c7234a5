"""Tests for customer_admin.services.customers.CustomerStore (insert, search, update, delete)."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from customer_admin.core.errors import (
    ConflictError,
    InsertError,
    NotFoundError,
    StoreError,
)
from customer_admin.models import Customer
from customer_admin.services.customers import CustomerStore
from support import make_engine, make_session_factory


def _rows(store: CustomerStore) -> list[tuple[int, str, str]]:
    return [(c.id, c.name, c.job) for c in store.search()]


class StoreTestCase(unittest.TestCase):
    """Fresh in-memory database per test."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.session_factory = make_session_factory(self.engine)
        self.db = self.session_factory()
        self.store = CustomerStore(self.db)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def seed(self) -> None:
        self.store.insert(3, "Carol", "engineer")
        self.store.insert(1, "Alice", "teacher")
        self.store.insert(12, "Bob", "Engine driver")
        self.store.insert(25, "Dave", "designer")


class TestInsert(StoreTestCase):
    def test_insert_returns_id_and_round_trips_through_search(self) -> None:
        self.assertEqual(self.store.insert(1, "A", "B"), 1)
        found = self.store.search("1")
        self.assertEqual(len(found), 1)
        self.assertEqual((found[0].id, found[0].name, found[0].job), (1, "A", "B"))

    def test_duplicate_id_raises_conflict_and_keeps_original(self) -> None:
        self.store.insert(1, "A", "B")
        with self.assertRaises(ConflictError) as ctx:
            self.store.insert(1, "Other", "Thing")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(_rows(self.store), [(1, "A", "B")])

    def test_store_usable_after_conflict(self) -> None:
        self.store.insert(1, "A", "B")
        with self.assertRaises(ConflictError):
            self.store.insert(1, "A", "B")
        self.store.insert(2, "C", "D")
        self.assertEqual([r[0] for r in _rows(self.store)], [1, 2])


class TestSearch(StoreTestCase):
    def test_no_keyword_returns_all_ordered_by_id(self) -> None:
        self.seed()
        self.assertEqual([r[0] for r in _rows(self.store)], [1, 3, 12, 25])

    def test_empty_keyword_is_treated_as_absent(self) -> None:
        self.seed()
        self.assertEqual([c.id for c in self.store.search("")], [1, 3, 12, 25])

    def test_repeated_search_is_identical(self) -> None:
        self.seed()
        self.assertEqual(_rows(self.store), _rows(self.store))

    def test_keyword_matches_name_or_job_case_sensitively(self) -> None:
        self.seed()
        # "eng" is in "engineer" but not in "Engine driver".
        self.assertEqual([c.id for c in self.store.search("eng")], [3])
        self.assertEqual([c.id for c in self.store.search("Eng")], [12])

    def test_keyword_matches_id_as_text(self) -> None:
        self.seed()
        # "2" appears in ids 12 and 25 only.
        self.assertEqual([c.id for c in self.store.search("2")], [12, 25])

    def test_keyword_matches_any_field(self) -> None:
        self.seed()
        # job "teacher", names "Carol" and "Dave"; "Alice" is capitalized.
        self.assertEqual([c.id for c in self.store.search("a")], [1, 3, 25])

    def test_like_wildcards_match_literally(self) -> None:
        self.seed()
        self.store.insert(40, "100%", "sales_rep")
        self.assertEqual([c.id for c in self.store.search("%")], [40])
        self.assertEqual([c.id for c in self.store.search("_")], [40])

    def test_no_match_returns_empty_list(self) -> None:
        self.seed()
        self.assertEqual(self.store.search("zzz"), [])


class TestUpdate(StoreTestCase):
    def test_update_changes_name_and_job_only(self) -> None:
        self.seed()
        self.store.update(3, "Caroline", "architect")
        self.assertIn((3, "Caroline", "architect"), _rows(self.store))
        self.assertEqual(len(_rows(self.store)), 4)

    def test_update_missing_id_raises_not_found_and_changes_nothing(self) -> None:
        self.seed()
        before = _rows(self.store)
        with self.assertRaises(NotFoundError) as ctx:
            self.store.update(99, "X", "Y")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(_rows(self.store), before)


class TestDelete(StoreTestCase):
    def test_delete_removes_record(self) -> None:
        self.seed()
        self.store.delete(12)
        self.assertEqual([r[0] for r in _rows(self.store)], [1, 3, 25])
        check = self.session_factory()
        try:
            self.assertIsNone(check.scalars(select(Customer).where(Customer.id == 12)).first())
        finally:
            check.close()

    def test_delete_missing_id_raises_not_found_and_changes_nothing(self) -> None:
        self.seed()
        before = _rows(self.store)
        with self.assertRaises(NotFoundError):
            self.store.delete(99)
        self.assertEqual(_rows(self.store), before)


class TestStoreFailures(unittest.TestCase):
    """Driver errors are rolled back and surfaced as client-safe ApiErrors."""

    def _failing_session(self, exc: Exception) -> MagicMock:
        session = MagicMock()
        session.execute.side_effect = exc
        session.scalars.side_effect = exc
        return session

    def test_non_integrity_insert_failure_is_insert_error(self) -> None:
        session = self._failing_session(OperationalError("INSERT", {}, Exception("boom")))
        with self.assertRaises(InsertError) as ctx:
            CustomerStore(session).insert(1, "A", "B")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertNotIn("boom", ctx.exception.message)
        session.rollback.assert_called_once()
        session.commit.assert_not_called()

    def test_integrity_error_is_conflict(self) -> None:
        session = self._failing_session(IntegrityError("INSERT", {}, Exception("dup")))
        with self.assertRaises(ConflictError):
            CustomerStore(session).insert(1, "A", "B")
        session.rollback.assert_called_once()

    def test_search_failure_is_store_error(self) -> None:
        session = self._failing_session(OperationalError("SELECT", {}, Exception("down")))
        with self.assertRaises(StoreError) as ctx:
            CustomerStore(session).search("x")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_update_failure_is_store_error(self) -> None:
        session = self._failing_session(OperationalError("UPDATE", {}, Exception("down")))
        with self.assertRaises(StoreError) as ctx:
            CustomerStore(session).update(1, "A", "B")
        self.assertEqual(ctx.exception.message, "Failed to update customer.")
        session.rollback.assert_called_once()

    def test_delete_failure_is_store_error(self) -> None:
        session = self._failing_session(OperationalError("DELETE", {}, Exception("down")))
        with self.assertRaises(StoreError) as ctx:
            CustomerStore(session).delete(1)
        self.assertEqual(ctx.exception.message, "Failed to delete customer.")


class TestStatementsAreParameterized(unittest.TestCase):
    """Caller-supplied values never appear in the SQL text sent to the driver."""

    def test_search_keyword_is_bound(self) -> None:
        session = MagicMock()
        session.scalars.return_value = []
        payload = "x' OR '1'='1"
        CustomerStore(session).search(payload)
        stmt = session.scalars.call_args[0][0]
        compiled = stmt.compile()
        self.assertNotIn(payload, str(compiled))
        self.assertIn(payload, [v for v in compiled.params.values()])

    def test_nul_keyword_matches_nothing_without_querying(self) -> None:
        session = MagicMock()
        self.assertEqual(CustomerStore(session).search("a\x00b"), [])
        session.scalars.assert_not_called()

    def test_insert_values_are_bound(self) -> None:
        session = MagicMock()
        payload = "Robert'); DROP TABLE customers;--"
        CustomerStore(session).insert(1, payload, "job")
        stmt = session.execute.call_args[0][0]
        compiled = stmt.compile()
        self.assertNotIn(payload, str(compiled))
        self.assertIn(payload, compiled.params.values())

    def test_update_values_are_bound(self) -> None:
        session = MagicMock()
        session.execute.return_value.rowcount = 1
        payload = "x', job = 'pwned' WHERE 1=1;--"
        CustomerStore(session).update(5, payload, payload)
        stmt = session.execute.call_args[0][0]
        compiled = stmt.compile()
        self.assertNotIn(payload, str(compiled))
        self.assertEqual(list(compiled.params.values()).count(payload), 2)
        self.assertIn(5, compiled.params.values())

    def test_delete_id_is_bound(self) -> None:
        session = MagicMock()
        session.execute.return_value.rowcount = 1
        CustomerStore(session).delete(31337)
        stmt = session.execute.call_args[0][0]
        compiled = stmt.compile()
        self.assertNotIn("31337", str(compiled))
        self.assertIn(31337, compiled.params.values())


if __name__ == "__main__":
    unittest.main()
