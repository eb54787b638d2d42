"""Utility functions for the meal planner."""

import math
from typing import Dict


def format_ratio(ratio: float) -> str:
    """
    Format an achievement ratio as a percentage.

    Examples:
        >>> format_ratio(0.953)
        '95.3%'
        >>> format_ratio(float("inf"))
        'inf'
    """
    if math.isinf(ratio):
        return "inf"
    return f"{ratio * 100:.1f}%"


def format_ratios(ratios: Dict[str, float]) -> str:
    """
    Format a nutrient -> ratio mapping on one line.

    Examples:
        >>> format_ratios({"calories": 1.02, "protein": 0.9})
        'calories=102.0%, protein=90.0%'
    """
    return ", ".join(f"{name}={format_ratio(value)}" for name, value in ratios.items())


def format_meal(foods: Dict[str, int]) -> str:
    """
    Format food name -> grams.

    Examples:
        >>> format_meal({"Rice": 150, "Broccoli": 120})
        'Rice 150g, Broccoli 120g'
    """
    return ", ".join(f"{name} {grams}g" for name, grams in foods.items())
