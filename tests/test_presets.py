import unittest
from unittest import mock

from bizmetrics.errors import DataStoreError, InvalidParameterError
from bizmetrics.scenarios.presets import (
    Preset,
    default_parameters,
    default_presets,
    fetch_saved_presets,
    load_preset,
    save_preset,
    update_parameter,
)


class TestPresets(unittest.TestCase):
    def test_default_presets(self):
        presets = default_presets()
        self.assertEqual([p.name for p in presets], ["High Efficiency", "Cost Reduction", "Premium Product"])
        self.assertEqual([p.value for p in presets[0].parameters], [95, 500, 10, 2600, 550])
        self.assertEqual([p.value for p in presets[2].parameters], [88, 600, 15, 3200, 400])

    def test_update_parameter(self):
        params = default_parameters()
        updated = update_parameter(params, "p4", 3000)
        self.assertEqual(updated[3].value, 3000)
        self.assertEqual(params[3].value, 2500)

    def test_update_parameter_rejects_unknown_or_out_of_range(self):
        params = default_parameters()
        with self.assertRaises(InvalidParameterError):
            update_parameter(params, "p9", 1)
        with self.assertRaises(InvalidParameterError):
            update_parameter(params, "p1", 101)

    def test_load_preset(self):
        preset = default_presets()[1]
        self.assertEqual(load_preset(preset), list(preset.parameters))

    def test_record_round_trip(self):
        preset = default_presets()[0]
        self.assertEqual(Preset.from_record(preset.to_record()), preset)


class TestSavePreset(unittest.TestCase):
    def setUp(self):
        self.store = mock.Mock()
        self.presets = default_presets()

    def test_save_inserts_new_preset(self):
        updated, error = save_preset(self.store, "  Night shift ", default_parameters(), self.presets)
        self.assertIsNone(error)
        self.assertEqual(len(updated), 4)
        self.assertEqual(updated[-1].name, "Night shift")
        self.assertTrue(updated[-1].id.startswith("preset-"))

        table, rows = self.store.insert_rows.call_args[0]
        self.assertEqual(table, "presets")
        self.assertEqual(rows[0]["name"], "Night shift")
        self.assertEqual(len(rows[0]["parameters"]), 5)

    def test_blank_name_saves_nothing(self):
        updated, error = save_preset(self.store, "   ", default_parameters(), self.presets)
        self.assertEqual(updated, self.presets)
        self.assertIsNone(error)
        self.store.insert_rows.assert_not_called()

    def test_store_failure_keeps_preset_locally(self):
        self.store.insert_rows.side_effect = DataStoreError("permission denied", status=401)
        updated, error = save_preset(self.store, "Local", default_parameters(), self.presets)
        self.assertEqual(updated[-1].name, "Local")
        self.assertEqual(error, "Failed to save preset: permission denied")

    def test_fetch_skips_malformed_rows(self):
        good = default_presets()[0].to_record()
        bad_range = dict(good, id="bad", parameters=[dict(good["parameters"][0], value=500)])
        self.store.fetch_rows.return_value = [good, {"id": "no-name"}, bad_range]

        presets = fetch_saved_presets(self.store)
        self.assertEqual([p.id for p in presets], ["preset1"])


if __name__ == "__main__":
    unittest.main()
