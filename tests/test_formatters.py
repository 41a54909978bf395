import unittest

from bizmetrics.formatting.formatters import (
    NOT_AVAILABLE,
    PARSE_FALLBACK,
    calculate_average,
    calculate_percentage_change,
    calculate_total,
    format_currency,
    format_metric_value,
    format_number,
    format_percentage,
    format_percentage_change,
    parse_value,
)


class TestFormatCurrency(unittest.TestCase):
    def test_whole_dollars_with_grouping(self):
        self.assertEqual(format_currency(1234567.891), "$1,234,568")
        self.assertEqual(format_currency(0), "$0")

    def test_rounds_half_up(self):
        self.assertEqual(format_currency(1200.5), "$1,201")
        self.assertEqual(format_currency(2.5), "$3")
        self.assertEqual(format_currency(0.125, 2), "$0.13")

    def test_fraction_digits_are_fixed(self):
        self.assertEqual(format_currency(1200.5, 2), "$1,200.50")
        self.assertEqual(format_currency(7, 2), "$7.00")

    def test_negative_sign_before_dollar(self):
        self.assertEqual(format_currency(-1200), "-$1,200")
        self.assertEqual(format_currency(-85457.0), "-$85,457")

    def test_tiny_negative_rounds_to_plain_zero(self):
        self.assertEqual(format_currency(-0.4), "$0")

    def test_non_finite(self):
        self.assertEqual(format_currency(float("nan")), NOT_AVAILABLE)
        self.assertEqual(format_currency(float("inf")), NOT_AVAILABLE)
        self.assertEqual(format_currency(None), NOT_AVAILABLE)

    def test_large_values_keep_every_digit(self):
        self.assertEqual(format_currency(1e30), "$1" + ",000" * 10)
        self.assertEqual(format_currency(-1e30, 2), "-$1" + ",000" * 10 + ".00")
        self.assertTrue(format_currency(1.5e308).startswith("$150,000"))


class TestFormatPercentage(unittest.TestCase):
    def test_fraction_to_percent(self):
        self.assertEqual(format_percentage(0.1), "10.0%")
        self.assertEqual(format_percentage(0.257885), "25.8%")
        self.assertEqual(format_percentage(-0.142115), "-14.2%")

    def test_digits(self):
        self.assertEqual(format_percentage(0.552, 0), "55%")
        self.assertEqual(format_percentage(0.1234, 2), "12.34%")

    def test_negative_zero_normalized(self):
        self.assertEqual(format_percentage(-0.00001), "0.0%")

    def test_change_prefix(self):
        self.assertEqual(format_percentage_change(0.12), "+12.0%")
        self.assertEqual(format_percentage_change(0), "+0.0%")
        self.assertEqual(format_percentage_change(-0.05), "-5.0%")
        self.assertEqual(format_percentage_change(0.08, 0), "+8%")

    def test_non_finite(self):
        self.assertEqual(format_percentage(float("nan")), NOT_AVAILABLE)
        self.assertEqual(format_percentage_change(float("-inf")), NOT_AVAILABLE)

    def test_large_fraction(self):
        text = format_percentage(1e27)
        self.assertTrue(text.startswith("100,000,"))
        self.assertTrue(text.endswith(".0%"))


class TestFormatMisc(unittest.TestCase):
    def test_format_number(self):
        self.assertEqual(format_number(1248), "1,248")
        self.assertEqual(format_number(425.0), "425")
        self.assertEqual(format_number(1.25, 1), "1.3")

    def test_format_metric_value_by_unit(self):
        self.assertEqual(format_metric_value(1380, "currency"), "$1,380")
        self.assertEqual(format_metric_value(0.552, "percentage"), "55.2%")
        self.assertEqual(format_metric_value(425, "count"), "425")

    def test_large_values(self):
        self.assertEqual(format_number(1e30), "1" + ",000" * 10)
        self.assertEqual(format_metric_value(1e30, "currency"), "$1" + ",000" * 10)
        self.assertNotEqual(format_metric_value(1e27, "percentage"), NOT_AVAILABLE)


class TestParseValue(unittest.TestCase):
    def test_strips_currency_noise(self):
        self.assertEqual(parse_value("$1,234,568"), 1234568.0)
        self.assertEqual(parse_value(' "$2,500" '), 2500.0)
        self.assertEqual(parse_value("“1,000”"), 1000.0)

    def test_accounting_negative(self):
        self.assertEqual(parse_value("($1,200)"), -1200.0)
        self.assertEqual(parse_value("-$1,200"), -1200.0)

    def test_plain_negative(self):
        self.assertEqual(parse_value("-1200"), -1200.0)

    def test_numbers_pass_through(self):
        self.assertEqual(parse_value(42), 42.0)
        self.assertEqual(parse_value(3.5), 3.5)

    def test_malformed_falls_back(self):
        for raw in ("", "N/A", "-", "abc", None, True, float("nan"), "inf"):
            with self.subTest(raw=raw):
                self.assertEqual(parse_value(raw), PARSE_FALLBACK)

    def test_round_trip_whole_dollars(self):
        self.assertEqual(parse_value(format_currency(1200.5)), 1201.0)

    def test_round_trip_exact_at_two_digits(self):
        for v in (0.0, 12.34, 1200.5, 98765.43):
            with self.subTest(v=v):
                self.assertEqual(parse_value(format_currency(v, 2)), v)


class TestAggregates(unittest.TestCase):
    def test_percentage_change(self):
        self.assertAlmostEqual(calculate_percentage_change(110, 100), 0.1)
        self.assertEqual(calculate_percentage_change(50, 0), 0.0)

    def test_average_and_total(self):
        self.assertEqual(calculate_average([]), 0.0)
        self.assertEqual(calculate_average([1, 2, 3]), 2.0)
        self.assertEqual(calculate_total([1, 2.5]), 3.5)


if __name__ == "__main__":
    unittest.main()
