import unittest
from dataclasses import replace

from bizmetrics.calc.metrics import ScenarioParameters, calculate_scenario_results
from bizmetrics.errors import InvalidParameterError
from bizmetrics.scenarios.scenario_book import (
    SCENARIO_FIELDS,
    Scenario,
    ScenarioBook,
    apply_edits,
    get_path,
    sample_scenarios,
    toggle_selection,
)


class TestToggleSelection(unittest.TestCase):
    def test_cap_keeps_first_four(self):
        selected = []
        for sid in ["1", "2", "3", "4", "5"]:
            selected = toggle_selection(selected, sid)
        self.assertEqual(selected, ["1", "2", "3", "4"])

    def test_deselect_always_allowed(self):
        selected = toggle_selection(["1", "2", "3", "4"], "2")
        self.assertEqual(selected, ["1", "3", "4"])
        self.assertEqual(toggle_selection(selected, "5"), ["1", "3", "4", "5"])

    def test_input_not_mutated(self):
        selected = ["1"]
        toggle_selection(selected, "2")
        self.assertEqual(selected, ["1"])


class TestSampleScenarios(unittest.TestCase):
    def test_samples(self):
        scenarios = sample_scenarios()
        self.assertEqual([s.id for s in scenarios], ["1", "2", "3", "4"])
        self.assertEqual(scenarios[1].parameters.production.volume, 650)
        self.assertEqual(scenarios[2].parameters.prices["dx"], 2000.0)
        self.assertEqual(scenarios[3].parameters.costs.materials, 400)

    def test_results_match_parameters(self):
        for s in sample_scenarios():
            with self.subTest(scenario=s.name):
                self.assertEqual(s.results, calculate_scenario_results(s.parameters))


class TestScenarioBook(unittest.TestCase):
    def setUp(self):
        self.book = ScenarioBook.sample()

    def test_sample_selection(self):
        self.assertEqual(self.book.selected, ["1", "2"])
        self.assertEqual([s.name for s in self.book.selected_scenarios()], ["Current State", "Growth Strategy"])

    def test_create(self):
        created = self.book.create()
        self.assertEqual(created.id, "5")
        self.assertEqual(created.name, "New Scenario 5")
        self.assertEqual(created.parameters, ScenarioParameters())
        self.assertIs(self.book.get("5"), created)

    def test_duplicate(self):
        copy = self.book.duplicate("3")
        self.assertEqual(copy.id, "5")
        self.assertEqual(copy.name, "Premium Pricing (Copy)")
        self.assertEqual(copy.parameters, self.book.get("3").parameters)
        self.assertIsNone(self.book.duplicate("99"))

    def test_delete_drops_selection(self):
        self.book.delete("2")
        self.assertIsNone(self.book.get("2"))
        self.assertEqual(self.book.selected, ["1"])

    def test_can_delete_last(self):
        book = ScenarioBook(scenarios=[Scenario.create("1", "Only")])
        self.assertFalse(book.can_delete())
        self.assertTrue(self.book.can_delete())

    def test_save_recomputes(self):
        current = self.book.get("1")
        edited = replace(current, parameters=apply_edits(current.parameters, {"production.volume": 800}))
        saved = self.book.save(edited)
        self.assertEqual(saved.results, calculate_scenario_results(saved.parameters))
        self.assertNotEqual(saved.results, current.results)
        self.assertIs(self.book.get("1"), saved)

    def test_save_rejects_zero_mix(self):
        current = self.book.get("1")
        edited = replace(current, parameters=replace(current.parameters, product_mix={"kx": 0, "dx": 0, "ex": 0}))
        with self.assertRaises(InvalidParameterError):
            self.book.save(edited)
        self.assertIs(self.book.get("1"), current)

    def test_toggle_respects_cap(self):
        for sid in ["3", "4"]:
            self.book.toggle(sid)
        self.book.create()
        self.book.toggle("5")
        self.assertEqual(self.book.selected, ["1", "2", "3", "4"])

    def test_selected_in_book_order(self):
        self.book.selected = ["3", "1"]
        self.assertEqual([s.id for s in self.book.selected_scenarios()], ["1", "3"])


class TestEditorFields(unittest.TestCase):
    def test_every_field_resolves(self):
        params = ScenarioParameters()
        for f in SCENARIO_FIELDS:
            with self.subTest(path=f.path):
                value = get_path(params, f.path)
                self.assertLessEqual(f.min, value)
                self.assertLessEqual(value, f.max)

    def test_apply_edits(self):
        params = apply_edits(ScenarioParameters(), {"prices.ex": 1000, "market.growth": 10})
        self.assertEqual(params.prices["ex"], 1000)
        self.assertEqual(params.market.growth, 10)


if __name__ == "__main__":
    unittest.main()
