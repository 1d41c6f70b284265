import unittest

from ..controllers.table_controller import PagedTableController
from ..di import build_container
from ..tables import CATEGORIES, RECENT_TRANSACTIONS, TRANSACTIONS, table_config


def memory_config(**ui):
    config = {
        "sqlite": {"db_path": ":memory:"},
        "ui": {"per_page": 20, "page_size_options": [10, 20, 50]},
    }
    config["ui"].update(ui)
    return config


class TestTableConfigFromSettings(unittest.TestCase):
    def test_page_sizes_come_from_ui_section(self):
        config = table_config(CATEGORIES, memory_config())
        self.assertEqual(config.page_size_options, (10, 20, 50))
        self.assertEqual(config.default_page_size, 20)
        self.assertIn("name", config.sortable_fields)

    def test_recent_transactions_share_transaction_fields(self):
        recent = table_config(RECENT_TRANSACTIONS, memory_config())
        full = table_config(TRANSACTIONS, memory_config())
        self.assertEqual(recent.sortable_fields, full.sortable_fields)
        self.assertEqual(recent.name, RECENT_TRANSACTIONS)


class TestContainer(unittest.TestCase):
    def setUp(self):
        self.container = build_container(memory_config())

    def tearDown(self):
        self.container.close()

    def test_singletons(self):
        self.assertIs(self.container.db, self.container.db)
        self.assertIs(self.container.category_repo, self.container.category_repo)
        self.assertIs(self.container.source(CATEGORIES), self.container.source(CATEGORIES))
        self.assertIs(self.container.transaction_service, self.container.transaction_service)

    def test_each_view_gets_its_own_controller(self):
        first = self.container.table_controller(TRANSACTIONS)
        second = self.container.table_controller(TRANSACTIONS)
        self.assertIsInstance(first, PagedTableController)
        self.assertIsNot(first, second)
        self.assertEqual(first.snapshot.page_size, 20)

    def test_services_share_the_database(self):
        self.assertIs(self.container.category_service._repo, self.container.category_repo)
        self.assertIs(self.container.report_service._categories, self.container.category_repo)


if __name__ == "__main__":
    unittest.main()
