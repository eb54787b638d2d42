"""Configuration module for nutrient constants, default bands, and settings."""

from typing import Dict, List, Optional, Tuple
from pydantic_settings import BaseSettings


# Nutrients tracked by NutrientVector, in canonical order
NUTRIENT_NAMES: List[str] = [
    "calories",
    "carbs",
    "protein",
    "fat",
    "calcium",
    "potassium",
    "sodium",
    "magnesium",
    "iron",
    "phosphorus",
]

MACRO_NUTRIENTS = ["carbs", "protein", "fat"]
MICRO_NUTRIENTS = ["calcium", "potassium", "sodium", "magnesium", "iron", "phosphorus"]

# kcal per gram of macro nutrient
CALORIES_PER_GRAM = {
    "carbs": 4.0,
    "protein": 4.0,
    "fat": 9.0,
}


# Achievement-rate bands (min_rate, max_rate) of actual / target.
# Tracked nutrients are exactly the keys of the band map in use.
DEFAULT_ACHIEVEMENT_BANDS: Dict[str, Tuple[float, float]] = {
    "calories": (0.9, 1.1),
    "carbs": (0.85, 1.15),
    "protein": (0.9, 1.2),
    "fat": (0.7, 1.1),
    "calcium": (0.8, 1.5),
    "potassium": (0.8, 1.5),
    "sodium": (0.5, 1.0),
    "magnesium": (0.8, 1.5),
}

# Band used for a nutrient that has a weight but no explicit band
FALLBACK_ACHIEVEMENT_BAND = (0.8, 1.2)

DEFAULT_NUTRIENT_WEIGHTS: Dict[str, float] = {
    "calories": 3.0,
    "carbs": 1.0,
    "protein": 1.0,
    "fat": 0.8,
    "calcium": 0.7,
    "potassium": 0.7,
    "sodium": 0.8,
    "magnesium": 0.7,
    "iron": 0.7,
    "phosphorus": 0.7,
}

# Nutrients whose excess above the band decays exponentially
EXCESS_PENALIZED_NUTRIENTS = {"calories", "sodium"}

# Hard-constraint threshold for every nutrient objective
NUTRIENT_HARD_THRESHOLD = 0.8

# Weights of the non-nutrient objectives
PREFERENCE_WEIGHT = 0.2
DIVERSITY_WEIGHT = 0.2
BALANCE_WEIGHT = 0.2

# Aggregate score a front-1 member needs to count as good enough
GOOD_ENOUGH_THRESHOLD = 0.8


# Weights for the fallback deviation ranking
MICRO_DEVIATION_WEIGHT = 0.5
DEVIATION_WEIGHTS: Dict[str, float] = {
    "calories": 3.0,
    **{name: 1.0 for name in MACRO_NUTRIENTS},
    **{name: MICRO_DEVIATION_WEIGHT for name in MICRO_NUTRIENTS},
}

# Number of Solutions returned when no front-1 member is fully in band
FALLBACK_RESULT_COUNT = 3
# Fallback Solutions with this nutrient in band rank ahead of all others
PRIMARY_NUTRIENT = "calories"


# Food categories: (min_grams, max_grams, default_grams)
CATEGORY_INTAKE_RANGES: Dict[str, Tuple[float, float, float]] = {
    "staple": (100, 200, 150),
    "vegetable": (100, 200, 150),
    "fruit": (100, 250, 150),
    "meat": (50, 100, 75),
    "fish": (50, 100, 75),
    "egg": (25, 75, 50),
    "milk": (100, 300, 200),
    "oil": (5, 15, 10),
    "pastry": (25, 75, 50),
    "mushroom": (50, 100, 75),
    "bean": (50, 100, 75),
    "other": (25, 75, 50),
}

# Relative odds of picking a non-staple category during initialization
CATEGORY_SELECTION_WEIGHTS: Dict[str, float] = {
    "vegetable": 0.30,
    "fruit": 0.10,
    "meat": 0.15,
    "fish": 0.08,
    "egg": 0.08,
    "milk": 0.08,
    "oil": 0.05,
    "pastry": 0.04,
    "mushroom": 0.04,
    "bean": 0.05,
    "other": 0.03,
}

# Ideal category share of a meal used by the diversity objective
IDEAL_CATEGORY_DISTRIBUTION: Dict[str, float] = {
    "staple": 0.20,
    "vegetable": 0.30,
    "fruit": 0.15,
    "meat": 0.15,
    "fish": 0.05,
    "egg": 0.05,
    "milk": 0.05,
    "oil": 0.05,
}

PROTEIN_SOURCE_CATEGORIES = {"meat", "fish", "egg", "bean"}


# Restriction tags implied by a religious belief
RELIGIOUS_RESTRICTIONS: Dict[str, List[str]] = {
    "islam": ["pork", "alcohol"],
    "hinduism": ["beef"],
    "buddhism": ["meat", "onion", "garlic"],
    "judaism": ["pork", "shellfish", "mixing_meat_dairy"],
}

DEFAULT_SPICE_TOLERANCE = 2
MAX_SPICE_LEVEL = 5

# Ideal calorie share per macro nutrient
DEFAULT_MACRO_SPLIT = {
    "carbs": 0.60,
    "protein": 0.15,
    "fat": 0.25,
}


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "mealplanner.log"
    GENERATION_LOG_FILE: Optional[str] = None

    # Evolutionary search defaults
    POPULATION_SIZE: int = 50
    MAX_GENERATIONS: int = 100
    CROSSOVER_RATE: float = 0.9
    MUTATION_RATE: float = 0.2
    MIN_FOODS_PER_MEAL: int = 4
    MAX_FOODS_PER_MEAL: int = 8
    TOURNAMENT_SIZE: int = 2
    MIN_PARETO_SOLUTIONS: int = 10
    RANDOM_SEED: Optional[int] = None
    PARALLEL_EVALUATION: bool = False

    # Food catalog
    FOOD_CATALOG_CSV: str = "data/foods.csv"
    FOOD_CATALOG_SEPARATOR: str = ","

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "MEALPLANNER_",
    }
