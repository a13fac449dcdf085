"""Plain-text rendering of the dashboard metrics."""

from typing import Optional

from fitness_tracker.measurements import activity_level_label, body_composition, weight_trend
from fitness_tracker.metrics import recorded_value
from fitness_tracker.models import DerivedMetrics, Measurement
from fitness_tracker.units import cm_to_ft_in, kg_to_lbs, round_half_up

NO_DATA = "No data"


def _fmt(value, unit: str = "") -> str:
    if value is None:
        return NO_DATA
    if isinstance(value, int):
        text = f"{value:,}"
    else:
        text = f"{value:g}"
    return f"{text}{unit}"


def format_metrics(measurement: Optional[Measurement], metrics: DerivedMetrics) -> str:
    """Format current measurements and derived metrics for display."""
    m = measurement or Measurement()
    weight = recorded_value(m.weight_kg)
    height = recorded_value(m.height_cm)

    weight_text = _fmt(weight, " kg")
    if weight is not None:
        weight_text += f" ({round_half_up(kg_to_lbs(weight))} lbs)"
    height_text = _fmt(height, " cm")
    if height is not None:
        feet, inches = cm_to_ft_in(height)
        height_text += f" ({feet}'{inches}\")"
    activity = activity_level_label(m.activity_level) if m.activity_level is not None else NO_DATA

    if metrics.bmi:
        bmi = f"{metrics.bmi.value:g} ({metrics.bmi.status})"
    else:
        bmi = NO_DATA

    lines = [
        "Measurements",
        "=" * 45,
        f"Weight:            {weight_text}",
        f"Height:            {height_text}",
        f"Waist:             {_fmt(recorded_value(m.waist_cm), ' cm')}",
        f"Hip:               {_fmt(recorded_value(m.hip_cm), ' cm')}",
        f"Neck:              {_fmt(recorded_value(m.neck_cm), ' cm')}",
        f"Activity level:    {activity}",
        "",
        "Health Metrics",
        "=" * 45,
        f"Age:               {_fmt(metrics.age)}",
        f"BMI:               {bmi}",
        f"Body fat:          {_fmt(metrics.body_fat_percent, '%')}",
        f"Lean body mass:    {_fmt(metrics.lean_body_mass_kg, ' kg')}",
        f"Ideal weight:      {_fmt(metrics.ideal_body_weight_kg, ' kg')}",
        f"Water:             {_fmt(metrics.water_intake_ml, ' ml/day')}",
        f"BMR:               {_fmt(metrics.bmr, ' kcal')}",
        f"TDEE:              {_fmt(metrics.tdee, ' kcal')}",
    ]

    if metrics.macros:
        lines.append(f"Protein:           {metrics.macros.protein_g}g")
        lines.append(f"Fat:               {metrics.macros.fat_g}g")
        lines.append(f"Carbs:             {metrics.macros.carbs_g}g")
    else:
        lines.append(f"Macros:            {NO_DATA}")

    composition = body_composition(weight, metrics.body_fat_percent)
    if composition:
        lines.append(
            f"\nComposition:       {composition.lean_mass_kg:g} kg lean mass, "
            f"{composition.fat_mass_kg:g} kg fat mass"
        )

    return "\n".join(lines)


def format_weight_history(points: list) -> str:
    """Format the weight progress history with its trend."""
    lines = ["Weight Progress", "=" * 45]
    if not points:
        lines.append("No weight measurements recorded yet.")
        return "\n".join(lines)

    for point in points:
        label = point.label or "(undated)"
        lines.append(f"  {label:<10} {point.weight_kg:g} kg")

    trend = weight_trend(points)
    if trend:
        direction = "up" if trend.is_up else "down"
        if trend.change_kg == 0:
            lines.append("\nWeight unchanged")
        else:
            lines.append(
                f"\nTrending {direction} by {trend.change_kg:g} kg "
                f"({trend.percent_change:g}%)"
            )
    return "\n".join(lines)
