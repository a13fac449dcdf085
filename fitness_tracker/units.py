"""Rounding and unit conversion helpers.

All derived metrics are rounded through ``round_half_up`` so that every
value shown to the user follows one rule: halves round toward positive
infinity (2.45 -> 2.5, -2.5 -> -2).
"""

import math

# Conversion constants
LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12


def round_half_up(value: float, ndigits: int = 0):
    """Round to ``ndigits`` decimals, halves toward positive infinity.

    Returns an int when ``ndigits`` is 0, otherwise a float.
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5)
    if ndigits == 0:
        return int(rounded)
    return rounded / factor


def cm_to_inches(cm: float) -> float:
    """Convert centimeters to inches."""
    return cm / CM_PER_INCH


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs / LBS_PER_KG


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * LBS_PER_KG


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def ft_in_to_cm(feet: int, inches: float) -> float:
    """Convert feet and inches to centimeters."""
    return (feet * INCHES_PER_FOOT + inches) * CM_PER_INCH


def cm_to_ft_in(cm: float) -> tuple:
    """Convert centimeters to (feet, inches)."""
    total_inches = cm / CM_PER_INCH
    feet = int(total_inches // INCHES_PER_FOOT)
    inches = round_half_up(total_inches % INCHES_PER_FOOT)
    if inches == 12:
        feet += 1
        inches = 0
    return feet, inches
