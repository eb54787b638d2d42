"""Tests for achievement ratios and band checks."""

import pytest
from mealplanner.config import MACRO_NUTRIENTS, MICRO_NUTRIENTS
from mealplanner.models.nutrients import NutrientVector
from mealplanner.nsga2.achievement import (
    achievement_ratio,
    achievement_ratios,
    all_in_band,
    band_distance,
    deviation_weight,
    nutrient_in_band,
    out_of_band,
    weighted_deviation,
)

BANDS = {"calories": (0.9, 1.1), "protein": (0.9, 1.2), "sodium": (0.5, 1.0)}


def test_ratio_skips_non_positive_target():
    assert achievement_ratio(50, 100) == pytest.approx(0.5)
    assert achievement_ratio(50, 0) is None

    ratios = achievement_ratios(
        NutrientVector(calories=1800, protein=30), NutrientVector(calories=2000), ["calories", "protein"]
    )
    assert ratios == {"calories": pytest.approx(0.9)}


def test_band_distance():
    assert band_distance(1.0, (0.9, 1.1)) == 0.0
    assert band_distance(0.8, (0.9, 1.1)) == pytest.approx(0.1)
    assert band_distance(1.3, (0.9, 1.1)) == pytest.approx(0.2)


def test_out_of_band_and_all_in_band():
    target = NutrientVector(calories=2000, protein=75, sodium=1000)
    totals = NutrientVector(calories=2000, protein=60, sodium=800)

    assert set(out_of_band(totals, target, BANDS)) == {"protein"}
    assert not all_in_band(totals, target, BANDS)
    assert all_in_band(totals.model_copy(update={"protein": 75}), target, BANDS)


def test_nutrient_in_band():
    target = NutrientVector(calories=2000, protein=75)
    totals = NutrientVector(calories=1700, protein=75)

    assert nutrient_in_band(totals, target, BANDS, "protein")
    assert not nutrient_in_band(totals, target, BANDS, "calories")
    # zero target and untracked nutrients never count against a solution
    assert nutrient_in_band(totals, target, BANDS, "sodium")
    assert nutrient_in_band(totals, target, BANDS, "iron")


def test_deviation_weights():
    assert deviation_weight("calories") == 3.0
    assert all(deviation_weight(name) == 1.0 for name in MACRO_NUTRIENTS)
    assert all(deviation_weight(name) == 0.5 for name in MICRO_NUTRIENTS)


def test_weighted_deviation():
    target = NutrientVector(calories=2000, protein=75, sodium=1000)
    totals = NutrientVector(calories=1600, protein=75, sodium=1200)

    # calories 0.1 below band x3, sodium 0.2 above band x0.5
    assert weighted_deviation(totals, target, BANDS) == pytest.approx(0.3 + 0.1)
