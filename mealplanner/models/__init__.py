"""Meal planner models package."""

from .nutrients import NutrientVector
from .food import FoodCategory, FoodCatalogEntry, IntakeRange
from .profile import MacroSplit, UserProfile

__all__ = [
    "NutrientVector",
    "FoodCategory",
    "FoodCatalogEntry",
    "IntakeRange",
    "MacroSplit",
    "UserProfile",
]
