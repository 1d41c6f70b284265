import unittest
from datetime import date, datetime

from ..utils.formatters import (
    format_amount,
    format_date,
    format_signed_amount,
    title_case,
    truncate_text,
)


class TestFormatters(unittest.TestCase):
    def test_format_date(self):
        self.assertEqual(format_date(date(2024, 3, 2)), "02 Mar 2024")
        self.assertEqual(format_date(datetime(2024, 3, 2, 10, 30), "%Y-%m-%d"), "2024-03-02")
        self.assertEqual(format_date("2024-03-02T10:30:00Z", "%d/%m/%Y"), "02/03/2024")
        self.assertEqual(format_date("yesterday"), "yesterday")
        self.assertEqual(format_date(None), "")

    def test_format_amount(self):
        self.assertEqual(format_amount(1234.5), "₹1,234.50")
        self.assertEqual(format_amount(-20, "$"), "-$20.00")
        self.assertEqual(format_amount(None), "-")

    def test_format_signed_amount(self):
        self.assertEqual(format_signed_amount(99.0, "expense", "$"), "-$99.00")
        self.assertEqual(format_signed_amount(99.0, "income", "$"), "$99.00")

    def test_truncate_text(self):
        self.assertEqual(truncate_text("short", 10), "short")
        self.assertEqual(truncate_text("a long description", 10), "a long ...")
        self.assertEqual(truncate_text(None), "")

    def test_title_case(self):
        self.assertEqual(title_case("inactive"), "Inactive")
        self.assertEqual(title_case(None), "")


if __name__ == "__main__":
    unittest.main()
