"""Achievement-ratio helpers shared by evaluation, mutation and extraction.

An achievement ratio is actual / target for one nutrient. A band
(min_rate, max_rate) is the acceptable ratio interval for that nutrient.
"""

from typing import Dict, List, Optional, Tuple

from ..config import (
    DEVIATION_WEIGHTS,
    FALLBACK_ACHIEVEMENT_BAND,
    MICRO_DEVIATION_WEIGHT,
)
from ..models.nutrients import NutrientVector

Band = Tuple[float, float]


def achievement_ratio(actual: float, target: float) -> Optional[float]:
    """actual / target, or None when the target is not positive."""
    if target <= 0:
        return None
    return actual / target


def achievement_ratios(
    totals: NutrientVector, target: NutrientVector, nutrients: List[str]
) -> Dict[str, float]:
    """Ratios for every listed nutrient with a positive target."""
    ratios = {}
    for name in nutrients:
        ratio = achievement_ratio(totals.get(name), target.get(name))
        if ratio is not None:
            ratios[name] = ratio
    return ratios


def band_for(bands: Dict[str, Band], nutrient: str) -> Band:
    return bands.get(nutrient, FALLBACK_ACHIEVEMENT_BAND)


def band_distance(ratio: float, band: Band) -> float:
    """How far a ratio lies outside its band (0.0 inside)."""
    min_rate, max_rate = band
    if ratio < min_rate:
        return min_rate - ratio
    if ratio > max_rate:
        return ratio - max_rate
    return 0.0


def out_of_band(
    totals: NutrientVector, target: NutrientVector, bands: Dict[str, Band]
) -> Dict[str, float]:
    """Ratios of the tracked nutrients that fall outside their band."""
    ratios = achievement_ratios(totals, target, list(bands))
    return {
        name: ratio
        for name, ratio in ratios.items()
        if band_distance(ratio, bands[name]) > 0
    }


def nutrient_in_band(
    totals: NutrientVector, target: NutrientVector, bands: Dict[str, Band], nutrient: str
) -> bool:
    """True if the nutrient is untracked, has no positive target, or is in its band."""
    if nutrient not in bands:
        return True
    ratio = achievement_ratio(totals.get(nutrient), target.get(nutrient))
    return ratio is None or band_distance(ratio, bands[nutrient]) == 0


def all_in_band(
    totals: NutrientVector, target: NutrientVector, bands: Dict[str, Band]
) -> bool:
    """True if every tracked nutrient with a positive target is in its band."""
    return not out_of_band(totals, target, bands)


def deviation_weight(nutrient: str) -> float:
    return DEVIATION_WEIGHTS.get(nutrient, MICRO_DEVIATION_WEIGHT)


def weighted_deviation(
    totals: NutrientVector, target: NutrientVector, bands: Dict[str, Band]
) -> float:
    """Sum of band distances, weighted calories x3, macros x1, micros x0.5."""
    ratios = achievement_ratios(totals, target, list(bands))
    return sum(
        band_distance(ratio, bands[name]) * deviation_weight(name)
        for name, ratio in ratios.items()
    )
