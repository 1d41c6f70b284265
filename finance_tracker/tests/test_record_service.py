import unittest

from ..db.repos.bank_account_repo import BankAccountRepo
from ..db.repos.category_repo import CategoryRepo
from ..db.repos.payment_mode_repo import PaymentModeRepo
from ..db.repos.transaction_repo import TransactionRepo
from ..errors import BackendError, ValidationError
from ..models.editor import EditorMode, EditorSession
from ..services.bank_account_service import BankAccountService
from ..services.category_service import CategoryService
from ..services.payment_mode_service import PaymentModeService
from ..services.sqlite_source import SQLiteDataSource
from ..services.transaction_service import TransactionService
from .fakes import memory_db


class ServiceTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.db = memory_db()
        self.category_repo = CategoryRepo(self.db)
        self.mode_repo = PaymentModeRepo(self.db)
        self.bank_repo = BankAccountRepo(self.db)
        self.transaction_repo = TransactionRepo(self.db)

        self.categories = CategoryService(SQLiteDataSource(self.category_repo))
        self.modes = PaymentModeService(SQLiteDataSource(self.mode_repo))
        self.banks = BankAccountService(SQLiteDataSource(self.bank_repo))
        self.transactions = TransactionService(
            SQLiteDataSource(self.transaction_repo),
            self.category_repo,
            self.mode_repo,
            self.bank_repo,
        )

    async def asyncTearDown(self):
        self.db.close()

    async def assertRejected(self, coro, field):
        with self.assertRaises(ValidationError) as ctx:
            await coro
        self.assertEqual(ctx.exception.field, field)
        return ctx.exception


class TestCategoryService(ServiceTestCase):
    async def test_create_from_new_session(self):
        session = self.categories.new_session().with_value("name", "  Rent ")
        self.assertEqual(session.mode, EditorMode.CREATING)

        stored = await self.categories.save(session)

        self.assertEqual(stored.name, "Rent")
        self.assertEqual(stored.type, "expense")
        self.assertEqual(stored.status, "active")

    async def test_name_is_required(self):
        await self.assertRejected(self.categories.save(self.categories.new_session()), "name")
        self.assertEqual(self.category_repo.count(), 0)

    async def test_duplicate_name_is_rejected_ignoring_case(self):
        await self.categories.save(self.categories.new_session().with_value("name", "Rent"))
        error = await self.assertRejected(
            self.categories.save(self.categories.new_session().with_value("name", "RENT")), "name"
        )
        self.assertIn("already exists", str(error))

    async def test_editing_keeps_own_name(self):
        stored = await self.categories.save(self.categories.new_session().with_value("name", "Rent"))
        session = self.categories.edit_session(stored).with_values({"name": "rent", "type": "income"})

        updated = await self.categories.save(session)

        self.assertEqual(updated.id, stored.id)
        self.assertEqual(updated.name, "rent")
        self.assertEqual(updated.type, "income")

    async def test_bad_choice_is_rejected(self):
        session = self.categories.new_session().with_values({"name": "Odd", "type": "transfer"})
        await self.assertRejected(self.categories.save(session), "type")

    async def test_toggle_status(self):
        stored = await self.categories.save(self.categories.new_session().with_value("name", "Rent"))
        toggled = await self.categories.toggle_status(stored)
        self.assertEqual(toggled.status, "inactive")

    async def test_delete(self):
        stored = await self.categories.save(self.categories.new_session().with_value("name", "Rent"))
        self.assertTrue(await self.categories.delete(stored.id))
        with self.assertRaises(BackendError):
            await self.categories.delete(stored.id)

    async def test_closed_session_cannot_be_saved(self):
        with self.assertRaises(ValidationError):
            await self.categories.save(EditorSession.closed())


class TestPaymentModeAndBankServices(ServiceTestCase):
    async def test_payment_mode_unique(self):
        await self.modes.save(self.modes.new_session().with_value("mode", "UPI"))
        await self.assertRejected(self.modes.save(self.modes.new_session().with_value("mode", "upi")), "mode")

    async def test_payment_mode_has_no_status(self):
        stored = await self.modes.save(self.modes.new_session().with_value("mode", "Cash"))
        with self.assertRaises(ValidationError):
            await self.modes.toggle_status(stored)

    async def test_bank_account_requires_holder(self):
        session = self.banks.new_session().with_value("bank_name", "HDFC")
        await self.assertRejected(self.banks.save(session), "holder_name")

    async def test_bank_account_normalises_ifsc(self):
        session = self.banks.new_session().with_values(
            {"bank_name": "HDFC", "holder_name": "A. Kumar", "ifsc_code": " hdfc0001234 "}
        )
        stored = await self.banks.save(session)
        self.assertEqual(stored.ifsc_code, "HDFC0001234")
        self.assertIsNone(stored.branch)
        self.assertEqual(self.banks.form_values(stored)["branch"], "")


class TestTransactionService(ServiceTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.food = self.category_repo.add({"name": "Food", "type": "expense"})
        self.old = self.category_repo.add({"name": "Old", "type": "expense", "status": "inactive"})
        self.pay = self.category_repo.add({"name": "Pay", "type": "income"})
        self.cash = self.mode_repo.add({"mode": "Cash"})
        self.bank = self.bank_repo.add({"bank_name": "HDFC", "holder_name": "A. Kumar"})

    def session(self, **values):
        base = {
            "transaction_date": "2024-03-02",
            "amount": "250",
            "type": "expense",
            "category_id": str(self.food.id),
            "payment_mode_id": str(self.cash.id),
        }
        base.update(values)
        return self.transactions.new_session().with_values(base)

    async def test_create(self):
        stored = await self.transactions.save(self.session(amount="1,250.5", bank_account_id=str(self.bank.id)))
        self.assertEqual(stored.amount, 1250.5)
        self.assertEqual(stored.category_name, "Food")
        self.assertEqual(stored.bank_name, "HDFC")
        self.assertIsNone(stored.description)

    async def test_amount_must_be_positive_number(self):
        await self.assertRejected(self.transactions.save(self.session(amount="0")), "amount")
        await self.assertRejected(self.transactions.save(self.session(amount="-5")), "amount")
        await self.assertRejected(self.transactions.save(self.session(amount="ten")), "amount")

    async def test_date_must_be_iso(self):
        await self.assertRejected(self.transactions.save(self.session(transaction_date="02/03/2024")), "transaction_date")

    async def test_category_must_match_type(self):
        error = await self.assertRejected(
            self.transactions.save(self.session(type="income")), "category_id"
        )
        self.assertIn("not income", str(error))

    async def test_inactive_category_rejected_for_new_rows(self):
        await self.assertRejected(
            self.transactions.save(self.session(category_id=str(self.old.id))), "category_id"
        )

    async def test_inactive_category_allowed_when_unchanged(self):
        stored = await self.transactions.save(self.session())
        self.category_repo.update(self.food.id, {"status": "inactive"})

        session = self.transactions.edit_session(stored).with_value("amount", "300")
        updated = await self.transactions.save(session)

        self.assertEqual(updated.amount, 300.0)

    async def test_missing_references(self):
        await self.assertRejected(self.transactions.save(self.session(category_id="")), "category_id")
        await self.assertRejected(self.transactions.save(self.session(category_id="999")), "category_id")
        await self.assertRejected(self.transactions.save(self.session(payment_mode_id="999")), "payment_mode_id")
        await self.assertRejected(self.transactions.save(self.session(bank_account_id="999")), "bank_account_id")
        await self.assertRejected(self.transactions.save(self.session(bank_account_id="abc")), "bank_account_id")

    async def test_edit_session_round_trips_form_values(self):
        stored = await self.transactions.save(self.session(description="lunch"))
        session = self.transactions.edit_session(stored)
        self.assertEqual(session.row_id, stored.id)
        self.assertEqual(session.get("amount"), "250.00")
        self.assertEqual(session.get("transaction_date"), "2024-03-02")
        self.assertEqual(session.get("bank_account_id"), "")

    async def test_lookup_options(self):
        options = await self.transactions.lookup_options()
        self.assertEqual(options["category_id:expense"], [("Food", str(self.food.id))])
        self.assertEqual(options["category_id:income"], [("Pay", str(self.pay.id))])
        self.assertEqual(options["payment_mode_id"], [("Cash", str(self.cash.id))])
        self.assertEqual(options["bank_account_id"], [("HDFC - A. Kumar", str(self.bank.id))])


if __name__ == "__main__":
    unittest.main()
