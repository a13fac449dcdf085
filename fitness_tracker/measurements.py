"""Measurement history helpers.

Collapses a user's measurement log into the latest value per field, checks
new form submissions, and prepares the weight progress history.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from fitness_tracker.config import ACTIVITY_FACTORS, ACTIVITY_LEVEL_LABELS, WEIGHT_HISTORY_LIMIT
from fitness_tracker.models import BodyComposition, Measurement, WeightPoint, WeightTrend
from fitness_tracker.units import round_half_up

MEASUREMENT_FIELDS = ("weight_kg", "height_cm", "waist_cm", "neck_cm", "hip_cm", "activity_level")


class MeasurementError(ValueError):
    """Raised when a submitted measurement is rejected."""


def _sort_key(record: Measurement):
    # Records without a timestamp are treated as the oldest
    if record.recorded_at is None:
        return (0, datetime.min)
    recorded_at = record.recorded_at
    if recorded_at.tzinfo is not None:
        recorded_at = recorded_at.astimezone(timezone.utc).replace(tzinfo=None)
    return (1, recorded_at)


def _newest_first(records: list) -> list:
    return sorted(records, key=_sort_key, reverse=True)


def latest_measurement(records: list) -> Measurement:
    """Most recent non-null value of every field across ``records``.

    A user may log weight one day and waist another, so each field is taken
    from the newest record that has it.
    """
    latest = Measurement()
    ordered = _newest_first(records)
    if ordered:
        latest.recorded_at = ordered[0].recorded_at

    for field_name in MEASUREMENT_FIELDS:
        for record in ordered:
            value = getattr(record, field_name)
            if value is not None:
                setattr(latest, field_name, value)
                break
    return latest


def _parse_positive(name: str, value, required: bool) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise MeasurementError(f"{name} is required")
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MeasurementError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise MeasurementError(f"{name} must be greater than 0")
    return number


def new_measurement(
    weight,
    height,
    waist,
    neck,
    hip=None,
    activity_level=None,
    recorded_at: Optional[datetime] = None,
) -> Measurement:
    """Validate a measurement form submission.

    Weight, height, waist and neck are required; hip and activity level are
    optional. Numeric strings are accepted and an empty hip is stored as None.
    """
    level = None
    if activity_level not in (None, ""):
        try:
            level = int(activity_level)
        except (TypeError, ValueError):
            raise MeasurementError(f"activity level must be an integer, got {activity_level!r}")
        if level not in ACTIVITY_FACTORS:
            choices = ", ".join(str(k) for k in ACTIVITY_FACTORS)
            raise MeasurementError(f"activity level must be one of: {choices}")

    return Measurement(
        weight_kg=_parse_positive("weight", weight, required=True),
        height_cm=_parse_positive("height", height, required=True),
        waist_cm=_parse_positive("waist", waist, required=True),
        neck_cm=_parse_positive("neck", neck, required=True),
        hip_cm=_parse_positive("hip", hip, required=False),
        activity_level=level,
        recorded_at=recorded_at,
    )


def activity_level_label(level: Optional[int]) -> str:
    return ACTIVITY_LEVEL_LABELS.get(level, "Unknown")


def weight_history(records: list, limit: int = WEIGHT_HISTORY_LIMIT) -> list:
    """The last ``limit`` weigh-ins in chronological order."""
    weighed = [r for r in _newest_first(records) if r.weight_kg is not None]
    recent = weighed[:limit]
    recent.reverse()
    return [WeightPoint(recorded_at=r.recorded_at, weight_kg=r.weight_kg) for r in recent]


def weight_trend(points: list) -> Optional[WeightTrend]:
    """Change from the first to the last point of a weight history.

    Magnitudes are absolute; ``is_up`` carries the direction.
    """
    if len(points) < 2:
        return None
    first = points[0].weight_kg
    last = points[-1].weight_kg
    change = last - first
    percent = change / first * 100 if first else 0.0
    return WeightTrend(
        change_kg=round_half_up(abs(change), 1),
        percent_change=round_half_up(abs(percent), 1),
        is_up=change > 0,
    )


def body_composition(
    weight_kg: Optional[float],
    body_fat_percent: Optional[float],
) -> Optional[BodyComposition]:
    """Split body weight into fat mass and lean mass."""
    if not weight_kg or not body_fat_percent:
        return None
    fat_mass = weight_kg * body_fat_percent / 100
    return BodyComposition(
        fat_mass_kg=round_half_up(fat_mass, 1),
        lean_mass_kg=round_half_up(weight_kg - fat_mass, 1),
    )
