"""Tests for the command-line interface."""

import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from fitness_tracker.cli import build_parser, main
from fitness_tracker.models import Measurement, Profile, WeightPoint
from fitness_tracker.store import StoreError


def run(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        main(argv)
    return out.getvalue()


class TestMetricsCommand(unittest.TestCase):
    def test_json_output(self):
        output = run([
            "metrics", "--weight", "70", "--height", "175",
            "--sex", "male", "--activity", "1", "--json",
        ])
        data = json.loads(output)
        self.assertEqual(data["bmi"], {"value": 22.9, "status": "Normal weight"})
        self.assertEqual(data["waterIntakeMl"], 2450)
        self.assertEqual(data["idealBodyWeightKg"], 70.5)
        # No date of birth, so no age-dependent metrics
        self.assertIsNone(data["age"])
        self.assertIsNone(data["bmr"])
        self.assertIsNone(data["tdee"])

    def test_imperial_input(self):
        output = run(["metrics", "--weight", "220.462", "--height", "80", "--imperial", "--json"])
        data = json.loads(output)
        # 100 kg at 203.2 cm
        self.assertEqual(data["bmi"]["value"], 24.2)

    def test_feet_and_inches(self):
        output = run(["metrics", "--weight", "70", "--feet", "5", "--inches", "10", "--json"])
        data = json.loads(output)
        # 177.8 cm
        self.assertEqual(data["bmi"]["value"], 22.1)

    def test_text_output(self):
        output = run(["metrics", "--weight", "70"])
        self.assertIn("Water:             2,450 ml/day", output)
        self.assertIn("BMI:               No data", output)

    def test_invalid_dob(self):
        with self.assertRaises(SystemExit):
            run(["metrics", "--dob", "15/06/1990"])


class TestStoreCommands(unittest.TestCase):
    @patch("fitness_tracker.cli.StoreClient")
    def test_dashboard(self, client_cls):
        client = client_cls.from_env.return_value
        client.fetch_snapshot.return_value = (
            Profile(sex="female"), Measurement(weight_kg=60, height_cm=165),
        )
        output = run(["dashboard", "--user", "u1", "--json"])
        client.fetch_snapshot.assert_called_once_with("u1")
        data = json.loads(output)
        self.assertEqual(data["waterIntakeMl"], 2100)
        self.assertIsNone(data["bodyFatPercent"])

    @patch("fitness_tracker.cli.StoreClient")
    def test_log(self, client_cls):
        client = client_cls.from_env.return_value
        output = run([
            "log", "--user", "u1", "--weight", "80", "--height", "180",
            "--waist", "85", "--neck", "38", "--activity", "2",
        ])
        self.assertIn("Measurement saved.", output)
        user_id, measurement = client.insert_measurement.call_args[0]
        self.assertEqual(user_id, "u1")
        self.assertEqual(measurement.weight_kg, 80)
        self.assertEqual(measurement.activity_level, 2)
        self.assertIsNone(measurement.hip_cm)

    @patch("fitness_tracker.cli.StoreClient")
    def test_log_rejects_invalid_measurement(self, client_cls):
        with self.assertRaises(SystemExit):
            run([
                "log", "--user", "u1", "--weight", "-80", "--height", "180",
                "--waist", "85", "--neck", "38",
            ])
        client_cls.from_env.return_value.insert_measurement.assert_not_called()

    @patch("fitness_tracker.cli.StoreClient")
    def test_log_feet_and_inches(self, client_cls):
        client = client_cls.from_env.return_value
        run([
            "log", "--user", "u1", "--weight", "80", "--feet", "6", "--inches", "0",
            "--waist", "85", "--neck", "38",
        ])
        _, measurement = client.insert_measurement.call_args[0]
        self.assertAlmostEqual(measurement.height_cm, 182.88)

    @patch("fitness_tracker.cli.StoreClient")
    def test_log_requires_height(self, client_cls):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            main(["log", "--user", "u1", "--weight", "80", "--waist", "85", "--neck", "38"])
        self.assertIn("height is required", out.getvalue())
        client_cls.from_env.return_value.insert_measurement.assert_not_called()

    @patch("fitness_tracker.cli.StoreClient")
    def test_history(self, client_cls):
        client = client_cls.from_env.return_value
        client.fetch_weight_history.return_value = [WeightPoint(None, 80), WeightPoint(None, 78)]
        output = run(["history", "--user", "u1", "--limit", "4"])
        client.fetch_weight_history.assert_called_once_with("u1", 4)
        self.assertIn("Trending down by 2 kg (2.5%)", output)

    @patch("fitness_tracker.cli.StoreClient")
    def test_store_error_exits(self, client_cls):
        client_cls.from_env.side_effect = StoreError("Store URL is not configured")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(["dashboard", "--user", "u1"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Store URL is not configured", out.getvalue())

    @patch("fitness_tracker.cli.StoreClient")
    def test_unreadable_row_exits(self, client_cls):
        client = client_cls.from_env.return_value
        client.fetch_snapshot.side_effect = StoreError("Store returned an unreadable user_measurements row")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(["dashboard", "--user", "u1"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("unreadable", out.getvalue())


class TestParser(unittest.TestCase):
    def test_log_requires_core_measurements(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["log", "--user", "u1", "--weight", "80"])

    def test_activity_choices(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["metrics", "--activity", "5"])


if __name__ == "__main__":
    unittest.main()
