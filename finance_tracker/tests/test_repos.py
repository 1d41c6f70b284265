import sqlite3
import unittest
from datetime import date

from ..db.repos.bank_account_repo import BankAccountRepo
from ..db.repos.category_repo import CategoryRepo
from ..db.repos.payment_mode_repo import PaymentModeRepo
from ..db.repos.transaction_repo import TransactionRepo
from ..errors import BackendError
from ..models.pagination import SortDirection, SortSpec
from .fakes import memory_db


class RepoTestCase(unittest.TestCase):
    def setUp(self):
        self.db = memory_db()
        self.categories = CategoryRepo(self.db)
        self.modes = PaymentModeRepo(self.db)
        self.banks = BankAccountRepo(self.db)
        self.transactions = TransactionRepo(self.db)

    def tearDown(self):
        self.db.close()


class TestCategoryRepo(RepoTestCase):
    def setUp(self):
        super().setUp()
        for name, kind in [
            ("Rent", "expense"),
            ("groceries", "expense"),
            ("Salary", "income"),
            ("Fuel", "expense"),
            ("Bonus", "income"),
        ]:
            self.categories.add({"name": name, "type": kind})

    def test_add_returns_stored_row(self):
        category = self.categories.add({"name": "Travel"})
        self.assertIsNotNone(category.id)
        self.assertEqual(category.type, "expense")
        self.assertEqual(category.status, "active")
        self.assertIsNotNone(category.created_on)

    def test_list_with_offset_and_limit(self):
        first = self.categories.list(offset=0, limit=2, sort=SortSpec("name"))
        second = self.categories.list(offset=2, limit=2, sort=SortSpec("name"))
        self.assertEqual([c.name for c in first], ["Bonus", "Fuel"])
        self.assertEqual([c.name for c in second], ["groceries", "Rent"])

    def test_sort_descending_ignores_case(self):
        rows = self.categories.list(limit=10, sort=SortSpec("name", SortDirection.DESC))
        self.assertEqual([c.name for c in rows], ["Salary", "Rent", "groceries", "Fuel", "Bonus"])

    def test_default_order_is_newest_first(self):
        rows = self.categories.list(limit=10)
        self.assertEqual(rows[0].name, "Bonus")
        self.assertEqual(rows[-1].name, "Rent")

    def test_search_and_count_agree(self):
        self.assertEqual(self.categories.count(search="income"), 2)
        rows = self.categories.list(limit=10, search="income")
        self.assertEqual({c.name for c in rows}, {"Salary", "Bonus"})

    def test_search_restricted_to_fields(self):
        self.assertEqual(self.categories.count(search="income", search_fields=["name"]), 0)
        self.assertEqual(self.categories.count(search="REN", search_fields=["name"]), 1)

    def test_search_treats_wildcards_literally(self):
        self.categories.add({"name": "100% refund"})
        self.assertEqual(self.categories.count(search="%", search_fields=["name"]), 1)
        self.assertEqual(self.categories.count(search="_", search_fields=["name"]), 0)

    def test_unknown_sort_field_is_rejected(self):
        with self.assertRaises(BackendError):
            self.categories.list(sort=SortSpec("id; DROP TABLE categories"))

    def test_unknown_search_field_is_rejected(self):
        with self.assertRaises(BackendError):
            self.categories.count(search="x", search_fields=["password"])

    def test_unknown_column_write_is_rejected(self):
        with self.assertRaises(BackendError):
            self.categories.add({"name": "X", "colour": "red"})

    def test_find_by_name_is_case_insensitive_and_can_exclude(self):
        rent = self.categories.find_by_name("  rent ")
        self.assertIsNotNone(rent)
        self.assertIsNone(self.categories.find_by_name("RENT", exclude_id=rent.id))

    def test_update_and_delete(self):
        rent = self.categories.find_by_name("Rent")
        updated = self.categories.update(rent.id, {"status": "inactive"})
        self.assertEqual(updated.status, "inactive")
        self.assertIsNotNone(updated.updated_on)

        self.assertTrue(self.categories.delete(rent.id))
        self.assertIsNone(self.categories.by_id(rent.id))
        self.assertFalse(self.categories.delete(rent.id))
        self.assertIsNone(self.categories.update(rent.id, {"name": "gone"}))

    def test_active_for_type(self):
        salary = self.categories.find_by_name("Salary")
        self.categories.update(salary.id, {"status": "inactive"})
        self.assertEqual([c.name for c in self.categories.active_for_type("income")], ["Bonus"])


class TestTransactionRepo(RepoTestCase):
    def setUp(self):
        super().setUp()
        self.food = self.categories.add({"name": "Food", "type": "expense"})
        self.pay = self.categories.add({"name": "Pay", "type": "income"})
        self.cash = self.modes.add({"mode": "Cash"})
        self.bank = self.banks.add({"bank_name": "HDFC", "holder_name": "A. Kumar"})

        self.transactions.add(self._txn("2024-03-02", 250.0, "lunch", self.food.id))
        self.transactions.add(self._txn("2024-03-15", 90.5, "coffee beans", self.food.id))
        self.transactions.add(self._txn("2024-02-28", 1200.0, "dinner party", self.food.id))
        self.transactions.add(
            self._txn("2024-03-01", 50000.0, "march salary", self.pay.id, kind="income", bank=self.bank.id)
        )

    def _txn(self, day, amount, description, category_id, kind="expense", bank=None):
        return {
            "transaction_date": day,
            "amount": amount,
            "type": kind,
            "category_id": category_id,
            "payment_mode_id": self.cash.id,
            "bank_account_id": bank,
            "description": description,
        }

    def test_rows_carry_joined_names(self):
        rows = self.transactions.list(limit=10, search="salary")
        self.assertEqual(len(rows), 1)
        txn = rows[0]
        self.assertEqual(txn.category_name, "Pay")
        self.assertEqual(txn.payment_mode, "Cash")
        self.assertEqual(txn.bank_name, "HDFC")
        self.assertEqual(txn.transaction_date, date(2024, 3, 1))

    def test_default_order_is_by_transaction_date(self):
        rows = self.transactions.list(limit=10)
        self.assertEqual(
            [t.description for t in rows],
            ["coffee beans", "lunch", "march salary", "dinner party"],
        )

    def test_sort_by_amount(self):
        rows = self.transactions.list(limit=2, sort=SortSpec("amount", SortDirection.DESC))
        self.assertEqual([t.amount for t in rows], [50000.0, 1200.0])

    def test_sort_by_joined_column(self):
        rows = self.transactions.list(limit=10, sort=SortSpec("category_name"))
        self.assertEqual([t.category_name for t in rows], ["Food", "Food", "Food", "Pay"])

    def test_search_matches_joined_columns(self):
        self.assertEqual(self.transactions.count(search="food"), 3)
        self.assertEqual(self.transactions.count(search="hdfc"), 1)
        self.assertEqual(self.transactions.count(search="food", search_fields=["description"]), 0)

    def test_total_amount_within_month(self):
        total = self.transactions.total_amount("expense", date(2024, 3, 1), date(2024, 3, 31))
        self.assertAlmostEqual(total, 340.5)
        self.assertEqual(self.transactions.total_amount("income", date(2024, 4, 1), date(2024, 4, 30)), 0.0)

    def test_deleting_bank_clears_reference(self):
        self.banks.delete(self.bank.id)
        txn = self.transactions.list(limit=1, search="salary")[0]
        self.assertIsNone(txn.bank_account_id)
        self.assertIsNone(txn.bank_name)

    def test_deleting_used_category_fails(self):
        with self.assertRaises(sqlite3.IntegrityError):
            self.categories.delete(self.food.id)
        self.assertIsNotNone(self.categories.by_id(self.food.id))

    def test_non_positive_amount_violates_constraint(self):
        with self.assertRaises(sqlite3.IntegrityError):
            self.transactions.add(self._txn("2024-03-03", 0, "free", self.food.id))


if __name__ == "__main__":
    unittest.main()
