import unittest
from dataclasses import replace

from bizmetrics.calc.metrics import (
    RATIO_SENTINEL,
    Market,
    Parameter,
    ProductInputs,
    Production,
    ScenarioParameters,
    calculate_metrics,
    calculate_product_metrics,
    calculate_scenario_results,
    normalize_mix,
    safe_ratio,
)
from bizmetrics.errors import InvalidParameterError
from bizmetrics.scenarios.presets import default_parameters
from bizmetrics.scenarios.scenario_book import sample_scenarios


class TestParameter(unittest.TestCase):
    def test_value_outside_range_raises(self):
        with self.assertRaises(InvalidParameterError):
            Parameter("p1", "Production Efficiency", 120, 50, 100, 1, "%")

    def test_min_above_max_raises(self):
        with self.assertRaises(InvalidParameterError):
            Parameter("p1", "Production Efficiency", 85, 100, 50, 1, "%")

    def test_with_value_revalidates(self):
        p = Parameter("p1", "Production Efficiency", 85, 50, 100, 1, "%")
        self.assertEqual(p.with_value(90).value, 90)
        with self.assertRaises(InvalidParameterError):
            p.with_value(10)

    def test_invalid_parameter_is_value_error(self):
        self.assertTrue(issubclass(InvalidParameterError, ValueError))


class TestProductMetrics(unittest.TestCase):
    def test_defaults(self):
        m = calculate_product_metrics(ProductInputs())
        self.assertAlmostEqual(m.labor_cost, 420.0)
        self.assertAlmostEqual(m.total_cost_per_unit, 1120.0)
        self.assertAlmostEqual(m.gross_margin, 1380.0)
        self.assertAlmostEqual(m.gross_margin_percent, 0.552)
        self.assertAlmostEqual(m.adjusted_production, 425.0)
        self.assertAlmostEqual(m.adjusted_revenue, 1_062_500.0)
        self.assertAlmostEqual(m.adjusted_profit, 586_500.0, places=4)
        self.assertAlmostEqual(m.roi, 1380 / 1120)

    def test_roi_uses_unadjusted_month(self):
        full = calculate_product_metrics(ProductInputs(efficiency=100))
        low = calculate_product_metrics(ProductInputs(efficiency=60))
        self.assertAlmostEqual(full.roi, low.roi)
        self.assertLess(low.adjusted_profit, full.adjusted_profit)

    def test_zero_price_uses_sentinel(self):
        m = calculate_product_metrics(ProductInputs(selling_price=0))
        self.assertEqual(m.gross_margin_percent, RATIO_SENTINEL)

    def test_calculate_metrics_from_parameters(self):
        metrics = calculate_metrics(default_parameters())
        self.assertEqual([m.id for m in metrics], ["m1", "m2", "m3", "m4", "m5", "m6", "m7"])
        by_name = {m.name: m for m in metrics}
        self.assertAlmostEqual(by_name["Unit Cost"].value, 1120.0)
        self.assertEqual(by_name["Gross Margin %"].unit, "percentage")
        self.assertEqual(by_name["Effective Production"].unit, "count")
        self.assertAlmostEqual(by_name["Monthly Revenue"].value, 1_062_500.0)

    def test_missing_parameters_keep_defaults(self):
        params = [p for p in default_parameters() if p.name != "Selling Price"]
        self.assertEqual(ProductInputs.from_parameters(params).selling_price, 2500.0)


class TestScenarioResults(unittest.TestCase):
    def test_default_scenario(self):
        r = calculate_scenario_results(ScenarioParameters())
        self.assertAlmostEqual(r.revenue, 601_321.875, places=4)
        self.assertAlmostEqual(r.cogs, 446_250.0, places=4)
        self.assertAlmostEqual(r.gross_profit, 155_071.875, places=4)
        self.assertAlmostEqual(r.operating_expenses, 214_537.5, places=4)
        self.assertAlmostEqual(r.operating_profit, -85_457.0, places=4)
        self.assertAlmostEqual(r.gross_margin, 0.257885, places=5)
        self.assertAlmostEqual(r.operating_margin, -0.142115, places=5)

    def test_without_market_adjustment(self):
        params = replace(ScenarioParameters(), market=Market(growth=0, competition=0))
        r = calculate_scenario_results(params)
        self.assertAlmostEqual(r.revenue, 572_687.5, places=4)
        self.assertAlmostEqual(r.operating_expenses, 214_537.5, places=4)
        self.assertAlmostEqual(r.operating_profit, 572_687.5 - 446_250 - 214_537.5, places=4)

    def test_gross_margin_identity(self):
        base = ScenarioParameters()
        cases = [(s.name, s.parameters) for s in sample_scenarios()]
        cases += [
            (f"efficiency {e}", replace(base, production=Production(500, e)))
            for e in (50, 70, 85, 100)
        ]
        cases += [(f"growth {g}", replace(base, market=Market(g, 3))) for g in (-5, 0, 15)]
        cases.append(("no volume", replace(base, production=Production(0, 85))))

        for label, params in cases:
            with self.subTest(label):
                r = calculate_scenario_results(params)
                self.assertAlmostEqual(r.gross_profit, r.revenue - r.cogs, places=6)
                if r.revenue:
                    self.assertAlmostEqual(r.gross_margin, r.gross_profit / r.revenue)
                else:
                    self.assertEqual(r.gross_margin, RATIO_SENTINEL)

    def test_mix_scale_does_not_matter(self):
        a = calculate_scenario_results(ScenarioParameters())
        b = calculate_scenario_results(
            replace(ScenarioParameters(), product_mix={"kx": 0.4, "dx": 0.35, "ex": 0.25})
        )
        self.assertAlmostEqual(a.revenue, b.revenue, places=6)

    def test_zero_volume_uses_sentinel(self):
        params = replace(ScenarioParameters(), production=Production(volume=0, efficiency=85))
        r = calculate_scenario_results(params)
        self.assertEqual(r.revenue, 0.0)
        self.assertEqual(r.gross_margin, RATIO_SENTINEL)
        self.assertEqual(r.operating_margin, RATIO_SENTINEL)

    def test_zero_mix_raises(self):
        params = replace(ScenarioParameters(), product_mix={"kx": 0, "dx": 0, "ex": 0})
        with self.assertRaises(InvalidParameterError):
            calculate_scenario_results(params)

    def test_mix_line_without_price_raises(self):
        params = replace(ScenarioParameters(), product_mix={"kx": 50, "zz": 50})
        with self.assertRaises(InvalidParameterError):
            calculate_scenario_results(params)

    def test_priced_line_missing_from_mix_sells_nothing(self):
        params = replace(ScenarioParameters(), product_mix={"kx": 100})
        r = calculate_scenario_results(replace(params, market=Market(0, 0)))
        self.assertAlmostEqual(r.revenue, 425 * 1200.0, places=4)


class TestHelpers(unittest.TestCase):
    def test_normalize_mix_sums_to_100(self):
        shares = normalize_mix({"kx": 3, "dx": 1})
        self.assertAlmostEqual(sum(shares.values()), 100.0)
        self.assertAlmostEqual(shares["kx"], 75.0)

    def test_normalize_mix_rejects_negative(self):
        with self.assertRaises(InvalidParameterError):
            normalize_mix({"kx": -1, "dx": 2})

    def test_safe_ratio(self):
        self.assertEqual(safe_ratio(1, 0), RATIO_SENTINEL)
        self.assertEqual(safe_ratio(1, 4), 0.25)


if __name__ == "__main__":
    unittest.main()
