"""Data models for the fitness tracker."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

_FRACTION = re.compile(r"\.(\d+)")


def _parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    # The store returns UTC timestamps with a trailing "Z"
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # Trailing zeros are dropped from fractional seconds; fromisoformat wants 6 digits
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _to_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _to_int(value) -> Optional[int]:
    # Non-integral or unreadable levels count as not recorded
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


@dataclass
class Profile:
    """User profile attributes the metrics depend on."""
    sex: Optional[str] = None  # "male", "female" or "other"
    date_of_birth: Optional[date] = None

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        """Build a profile from a ``user_profiles`` row."""
        sex = row.get("gender", row.get("sex"))
        return cls(
            sex=sex.strip().lower() if sex else None,
            date_of_birth=_parse_date(row.get("date_of_birth")),
        )


@dataclass
class Measurement:
    """A set of body measurements. Every field may be missing."""
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    waist_cm: Optional[float] = None
    neck_cm: Optional[float] = None
    hip_cm: Optional[float] = None
    activity_level: Optional[int] = None  # 1-4
    recorded_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Measurement":
        """Build a measurement from a ``user_measurements`` row."""
        return cls(
            weight_kg=_to_float(row.get("weight")),
            height_cm=_to_float(row.get("height")),
            waist_cm=_to_float(row.get("waist")),
            neck_cm=_to_float(row.get("neck")),
            hip_cm=_to_float(row.get("hip")),
            activity_level=_to_int(row.get("activity_level")),
            recorded_at=_parse_datetime(row.get("created_at")),
        )

    def to_row(self) -> dict:
        """Column mapping used when inserting into ``user_measurements``."""
        row = {
            "weight": self.weight_kg,
            "height": self.height_cm,
            "waist": self.waist_cm,
            "neck": self.neck_cm,
            "hip": self.hip_cm,
            "activity_level": self.activity_level,
        }
        if self.recorded_at is not None:
            row["created_at"] = self.recorded_at.isoformat()
        return row


@dataclass
class BMIResult:
    value: float
    status: str


@dataclass
class Macros:
    """Daily macronutrient targets in grams."""
    protein_g: int
    fat_g: int
    carbs_g: int


@dataclass
class DerivedMetrics:
    """Health metrics derived from a profile and a measurement set.

    Each metric is None when its inputs are unavailable.
    """
    age: Optional[int] = None
    bmi: Optional[BMIResult] = None
    bmr: Optional[int] = None
    body_fat_percent: Optional[float] = None
    tdee: Optional[int] = None
    macros: Optional[Macros] = None
    lean_body_mass_kg: Optional[float] = None
    ideal_body_weight_kg: Optional[float] = None
    water_intake_ml: Optional[int] = None

    def to_dict(self) -> dict:
        """Serialize using the field names the presentation layer expects."""
        return {
            "age": self.age,
            "bmi": (
                {"value": self.bmi.value, "status": self.bmi.status}
                if self.bmi else None
            ),
            "bmr": self.bmr,
            "bodyFatPercent": self.body_fat_percent,
            "tdee": self.tdee,
            "macros": (
                {
                    "proteinG": self.macros.protein_g,
                    "fatG": self.macros.fat_g,
                    "carbsG": self.macros.carbs_g,
                }
                if self.macros else None
            ),
            "leanBodyMassKg": self.lean_body_mass_kg,
            "idealBodyWeightKg": self.ideal_body_weight_kg,
            "waterIntakeMl": self.water_intake_ml,
        }


@dataclass
class WeightPoint:
    """A single weigh-in on the weight progress chart."""
    recorded_at: Optional[datetime]
    weight_kg: float

    @property
    def label(self) -> str:
        """Short date label, e.g. "Mar 4"."""
        if self.recorded_at is None:
            return ""
        return f"{self.recorded_at:%b} {self.recorded_at.day}"


@dataclass
class WeightTrend:
    """Change between the first and last weigh-in of a history."""
    change_kg: float
    percent_change: float
    is_up: bool


@dataclass
class BodyComposition:
    fat_mass_kg: float
    lean_mass_kg: float
