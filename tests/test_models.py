"""Tests for data models."""

import unittest
from datetime import date, datetime, timezone

from fitness_tracker.models import (
    BMIResult,
    DerivedMetrics,
    Macros,
    Measurement,
    Profile,
    WeightPoint,
)


class TestProfile(unittest.TestCase):
    def test_from_row(self):
        profile = Profile.from_row({"gender": "Female", "date_of_birth": "1992-04-03"})
        self.assertEqual(profile.sex, "female")
        self.assertEqual(profile.date_of_birth, date(1992, 4, 3))

    def test_from_row_missing_values(self):
        profile = Profile.from_row({"gender": None, "date_of_birth": None})
        self.assertIsNone(profile.sex)
        self.assertIsNone(profile.date_of_birth)

    def test_from_row_timestamp_date(self):
        profile = Profile.from_row({"gender": "male", "date_of_birth": "1992-04-03T00:00:00"})
        self.assertEqual(profile.date_of_birth, date(1992, 4, 3))


class TestMeasurement(unittest.TestCase):
    def test_from_row(self):
        m = Measurement.from_row({
            "weight": 80.5, "height": "180", "waist": 85, "neck": 38,
            "hip": None, "activity_level": "2",
            "created_at": "2026-03-01T08:30:00Z",
        })
        self.assertEqual(m.weight_kg, 80.5)
        self.assertEqual(m.height_cm, 180.0)
        self.assertIsNone(m.hip_cm)
        self.assertEqual(m.activity_level, 2)
        self.assertEqual(m.recorded_at, datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc))

    def test_from_partial_row(self):
        m = Measurement.from_row({"weight": 80, "created_at": "2026-03-01T08:30:00"})
        self.assertEqual(m.weight_kg, 80.0)
        self.assertIsNone(m.height_cm)
        self.assertIsNone(m.activity_level)

    def test_from_row_short_fraction(self):
        m = Measurement.from_row({"weight": 80, "created_at": "2026-03-01T08:00:00.5Z"})
        self.assertEqual(m.recorded_at, datetime(2026, 3, 1, 8, 0, 0, 500000, tzinfo=timezone.utc))

    def test_from_row_long_fraction(self):
        m = Measurement.from_row({"created_at": "2026-03-01T08:00:00.1234567+00:00"})
        self.assertEqual(m.recorded_at.microsecond, 123456)

    def test_from_row_activity_level(self):
        self.assertEqual(Measurement.from_row({"activity_level": 3.0}).activity_level, 3)
        self.assertEqual(Measurement.from_row({"activity_level": "2.0"}).activity_level, 2)
        self.assertIsNone(Measurement.from_row({"activity_level": 2.7}).activity_level)
        self.assertIsNone(Measurement.from_row({"activity_level": "high"}).activity_level)

    def test_to_row(self):
        m = Measurement(weight_kg=80, height_cm=180, waist_cm=85, neck_cm=38)
        self.assertEqual(m.to_row(), {
            "weight": 80, "height": 180, "waist": 85, "neck": 38,
            "hip": None, "activity_level": None,
        })

    def test_to_row_with_timestamp(self):
        m = Measurement(weight_kg=80, recorded_at=datetime(2026, 3, 1, 8, 30))
        self.assertEqual(m.to_row()["created_at"], "2026-03-01T08:30:00")


class TestDerivedMetrics(unittest.TestCase):
    def test_to_dict(self):
        metrics = DerivedMetrics(
            age=36,
            bmi=BMIResult(24.7, "Normal weight"),
            bmr=1750,
            body_fat_percent=16.1,
            tdee=2713,
            macros=Macros(170, 90, 305),
            lean_body_mass_kg=67.1,
            ideal_body_weight_kg=75.0,
            water_intake_ml=2800,
        )
        self.assertEqual(metrics.to_dict(), {
            "age": 36,
            "bmi": {"value": 24.7, "status": "Normal weight"},
            "bmr": 1750,
            "bodyFatPercent": 16.1,
            "tdee": 2713,
            "macros": {"proteinG": 170, "fatG": 90, "carbsG": 305},
            "leanBodyMassKg": 67.1,
            "idealBodyWeightKg": 75.0,
            "waterIntakeMl": 2800,
        })

    def test_to_dict_empty(self):
        d = DerivedMetrics().to_dict()
        self.assertEqual(len(d), 9)
        self.assertTrue(all(value is None for value in d.values()))


class TestWeightPoint(unittest.TestCase):
    def test_label(self):
        self.assertEqual(WeightPoint(datetime(2026, 3, 4), 80).label, "Mar 4")

    def test_label_undated(self):
        self.assertEqual(WeightPoint(None, 80).label, "")


if __name__ == "__main__":
    unittest.main()
