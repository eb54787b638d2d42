"""Tests for food catalog models."""

import pytest
from mealplanner.models.food import FoodCatalogEntry, FoodCategory, IntakeRange
from mealplanner.models.nutrients import NutrientVector


def test_intake_range_rejects_min_above_max():
    with pytest.raises(ValueError):
        IntakeRange(min_grams=200, max_grams=100, default_grams=150)


def test_intake_range_rejects_default_outside():
    with pytest.raises(ValueError):
        IntakeRange(min_grams=100, max_grams=200, default_grams=250)


def test_intake_range_clamp_rounds_and_bounds():
    intake_range = IntakeRange(min_grams=50, max_grams=100, default_grams=75)

    assert intake_range.clamp(10) == 50
    assert intake_range.clamp(180.6) == 100
    assert intake_range.clamp(72.6) == 73
    assert isinstance(intake_range.clamp(72.6), int)


def test_intake_range_normalization():
    intake_range = IntakeRange(min_grams=100, max_grams=200, default_grams=150)

    assert intake_range.normalized(100) == 0.0
    assert intake_range.normalized(150) == 0.5
    assert intake_range.denormalized(1.0) == 200
    assert intake_range.contains(200)
    assert not intake_range.contains(201)


def test_category_owns_intake_range():
    staple = FoodCategory.STAPLE.intake_range
    oil = FoodCategory.OIL.intake_range

    assert (staple.min_grams, staple.max_grams, staple.default_grams) == (100, 200, 150)
    assert (oil.min_grams, oil.max_grams, oil.default_grams) == (5, 15, 10)


def test_every_category_range_is_consistent():
    for category in FoodCategory:
        intake_range = category.intake_range
        assert intake_range.min_grams <= intake_range.default_grams <= intake_range.max_grams


def test_category_from_string():
    assert FoodCategory.from_string("Staple") == FoodCategory.STAPLE
    assert FoodCategory.from_string(" fish ") == FoodCategory.FISH
    assert FoodCategory.from_string("dessert") == FoodCategory.OTHER
    assert FoodCategory.from_string(None) == FoodCategory.OTHER


def test_catalog_entry_nutrients_for_grams():
    food = FoodCatalogEntry(
        name="Steamed rice",
        category=FoodCategory.STAPLE,
        nutrients=NutrientVector(calories=116, carbs=25.9, protein=2.6, fat=0.3),
    )

    portion = food.nutrients_for(150)

    assert portion.calories == pytest.approx(174)
    assert portion.carbs == pytest.approx(38.85)
    assert food.is_staple
    assert food.intake_range.max_grams == 200


def test_catalog_entry_rejects_bad_spice_level():
    with pytest.raises(ValueError):
        FoodCatalogEntry(name="Ghost pepper", category=FoodCategory.VEGETABLE, spice_level=9)
