"""Derived health metrics engine.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity multipliers for Total Daily Energy Expenditure (TDEE)
- US Navy circumference method for body-fat percentage
- Devine formula for ideal body weight

Every function is pure. A missing input never raises: the affected metric
is returned as None and unrelated metrics are still computed.

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
- Hodgdon JA, Beckett MB (1984). "Prediction of percent body fat for U.S.
  Navy men and women from body circumferences and height."
- Devine BJ (1974). "Gentamicin therapy." Drug Intell Clin Pharm.
"""

import math
from datetime import date
from typing import Optional

from fitness_tracker.config import (
    ACTIVITY_FACTORS,
    BMI_CATEGORIES,
    BMI_TOP_CATEGORY,
    BMR_SEX_OFFSETS,
    CALORIES_PER_GRAM,
    DEFAULT_ACTIVITY_FACTOR,
    DEVINE_BASE_HEIGHT_IN,
    DEVINE_BASE_KG,
    DEVINE_KG_PER_INCH,
    MACRO_SPLIT,
    NAVY_CONSTANTS,
    WATER_ML_PER_KG,
)
from fitness_tracker.models import BMIResult, DerivedMetrics, Macros, Measurement, Profile
from fitness_tracker.units import cm_to_inches, round_half_up


def compute_age(date_of_birth, today: Optional[date] = None) -> Optional[int]:
    """Whole years elapsed since ``date_of_birth``.

    One year is subtracted when this year's birthday has not been reached yet.
    """
    if date_of_birth is None:
        return None
    if isinstance(date_of_birth, str):
        date_of_birth = date.fromisoformat(date_of_birth[:10])
    if today is None:
        today = date.today()

    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def classify_bmi(bmi: float) -> str:
    for upper, label in BMI_CATEGORIES:
        if bmi < upper:
            return label
    return BMI_TOP_CATEGORY


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[BMIResult]:
    """Body Mass Index: weight(kg) / height(m)^2, rounded to 1 decimal.

    The status is classified on the unrounded value.
    """
    if weight_kg is None or height_cm is None or height_cm <= 0:
        return None
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    return BMIResult(value=round_half_up(bmi, 1), status=classify_bmi(bmi))


def compute_bmr(
    weight_kg: Optional[float],
    height_cm: Optional[float],
    age: Optional[int],
    sex: Optional[str],
) -> Optional[int]:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161

    Only defined for male and female; any other sex yields None.
    """
    if weight_kg is None or height_cm is None or age is None:
        return None
    offset = BMR_SEX_OFFSETS.get(sex)
    if offset is None:
        return None
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age + offset
    return round_half_up(bmr)


def compute_body_fat(
    height_cm: Optional[float],
    neck_cm: Optional[float],
    waist_cm: Optional[float],
    hip_cm: Optional[float],
    sex: Optional[str],
) -> Optional[float]:
    """Estimate body-fat percentage with the US Navy circumference method.

    Male:   495 / (1.0324 − 0.19077·log10(waist − neck) + 0.15456·log10(height)) − 450
    Female: 495 / (1.29579 − 0.35004·log10(waist + hip − neck) + 0.221·log10(height)) − 450

    Returns None when the circumference difference is not positive, when the
    female hip measurement is missing, or when the estimate is not above 0.
    """
    if height_cm is None or neck_cm is None or waist_cm is None:
        return None
    constants = NAVY_CONSTANTS.get(sex)
    if constants is None:
        return None

    if sex == "male":
        circumference = waist_cm - neck_cm
    else:
        if hip_cm is None:
            return None
        circumference = waist_cm + hip_cm - neck_cm
    if circumference <= 0 or height_cm <= 0:
        return None

    a, b, c = constants
    density = a - b * math.log10(circumference) + c * math.log10(height_cm)
    if density == 0:
        return None
    body_fat = 495 / density - 450
    if body_fat <= 0:
        return None
    return round_half_up(body_fat, 1)


def compute_tdee(bmr: Optional[int], activity_level: Optional[int] = None) -> Optional[int]:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity multiplier. Unknown or missing activity levels
    fall back to the sedentary multiplier (1.2).
    """
    if bmr is None:
        return None
    factor = ACTIVITY_FACTORS.get(activity_level, DEFAULT_ACTIVITY_FACTOR)
    return round_half_up(bmr * factor)


def compute_macros(tdee: Optional[int]) -> Optional[Macros]:
    """Split daily calories 25/30/45 into protein/fat/carbs grams.

    Each macro is rounded on its own, so the grams may not add back up to
    exactly ``tdee`` calories.
    """
    if tdee is None:
        return None
    return Macros(
        protein_g=round_half_up(tdee * MACRO_SPLIT["protein"] / CALORIES_PER_GRAM["protein"]),
        fat_g=round_half_up(tdee * MACRO_SPLIT["fat"] / CALORIES_PER_GRAM["fat"]),
        carbs_g=round_half_up(tdee * MACRO_SPLIT["carbs"] / CALORIES_PER_GRAM["carbs"]),
    )


def compute_lean_body_mass(
    weight_kg: Optional[float],
    body_fat_percent: Optional[float],
) -> Optional[float]:
    """Fat-free mass: weight × (100 − body fat %) / 100."""
    if weight_kg is None or body_fat_percent is None:
        return None
    return round_half_up(weight_kg * (100 - body_fat_percent) / 100, 1)


def compute_ideal_body_weight(height_cm: Optional[float], sex: Optional[str]) -> Optional[float]:
    """Ideal body weight using the Devine formula.

    Male:   50 kg + 2.3 kg per inch over 60 inches
    Female: 45.5 kg + 2.3 kg per inch over 60 inches

    Heights under 60 inches extrapolate linearly; no floor is applied.
    """
    if height_cm is None:
        return None
    base = DEVINE_BASE_KG.get(sex)
    if base is None:
        return None
    height_in = cm_to_inches(height_cm)
    return round_half_up(base + DEVINE_KG_PER_INCH * (height_in - DEVINE_BASE_HEIGHT_IN), 1)


def compute_water_intake(weight_kg: Optional[float]) -> Optional[int]:
    """Recommended daily water intake in millilitres (35 ml per kg)."""
    if weight_kg is None:
        return None
    return round_half_up(weight_kg * WATER_ML_PER_KG)


def recorded_value(value: Optional[float]) -> Optional[float]:
    # Zero or negative measurements are treated as not recorded
    if value is None or value <= 0:
        return None
    return value


def compute_metrics(
    profile: Optional[Profile],
    measurement: Optional[Measurement],
    today: Optional[date] = None,
) -> DerivedMetrics:
    """Compute every derived metric that the available inputs allow.

    Steps:
    1. Age from date of birth
    2. BMI, water intake and ideal body weight from the basic measurements
    3. BMR, then TDEE (sedentary if no activity level), then macros
    4. Body fat, then lean body mass
    """
    profile = profile or Profile()
    measurement = measurement or Measurement()

    weight = recorded_value(measurement.weight_kg)
    height = recorded_value(measurement.height_cm)
    waist = recorded_value(measurement.waist_cm)
    neck = recorded_value(measurement.neck_cm)
    hip = recorded_value(measurement.hip_cm)
    sex = profile.sex

    age = compute_age(profile.date_of_birth, today)
    bmr = compute_bmr(weight, height, age, sex)
    tdee = compute_tdee(bmr, measurement.activity_level)
    body_fat = compute_body_fat(height, neck, waist, hip, sex)

    return DerivedMetrics(
        age=age,
        bmi=compute_bmi(weight, height),
        bmr=bmr,
        body_fat_percent=body_fat,
        tdee=tdee,
        macros=compute_macros(tdee),
        lean_body_mass_kg=compute_lean_body_mass(weight, body_fat),
        ideal_body_weight_kg=compute_ideal_body_weight(height, sex),
        water_intake_ml=compute_water_intake(weight),
    )
