"""Application configuration and constants."""

import os

# External row store (PostgREST-style REST endpoint)
STORE_URL = os.environ.get("FITNESS_STORE_URL", "")
STORE_KEY = os.environ.get("FITNESS_STORE_KEY", "")
STORE_ACCESS_TOKEN = os.environ.get("FITNESS_STORE_ACCESS_TOKEN", "")
PROFILES_TABLE = "user_profiles"
MEASUREMENTS_TABLE = "user_measurements"
REQUEST_TIMEOUT = 30  # seconds

# Number of weigh-ins shown in the weight progress history
WEIGHT_HISTORY_LIMIT = 6

# Activity level multipliers for TDEE calculation (levels 1-4)
ACTIVITY_FACTORS = {
    1: 1.2,
    2: 1.375,
    3: 1.55,
    4: 1.725,
}
DEFAULT_ACTIVITY_FACTOR = 1.2  # Sedentary

ACTIVITY_LEVEL_LABELS = {
    1: "Sedentary",
    2: "Lightly Active",
    3: "Moderately Active",
    4: "Very Active",
}

# BMI classification (upper bounds, exclusive)
BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (25.0, "Normal weight"),
    (30.0, "Overweight"),
]
BMI_TOP_CATEGORY = "Obese"

# Mifflin-St Jeor sex-specific constants
BMR_SEX_OFFSETS = {
    "male": 5,
    "female": -161,
}

# US Navy circumference method: (a, b, c) in 495 / (a - b*log10(x) + c*log10(height)) - 450
NAVY_CONSTANTS = {
    "male": (1.0324, 0.19077, 0.15456),
    "female": (1.29579, 0.35004, 0.221),
}

# Devine formula base weight (kg) at 60 inches, plus kg per inch above that
DEVINE_BASE_KG = {
    "male": 50.0,
    "female": 45.5,
}
DEVINE_KG_PER_INCH = 2.3
DEVINE_BASE_HEIGHT_IN = 60

# Fixed calorie split used for macro targets
MACRO_SPLIT = {
    "protein": 0.25,
    "fat": 0.30,
    "carbs": 0.45,
}

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# Daily water requirement
WATER_ML_PER_KG = 35
