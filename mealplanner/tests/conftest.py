"""Shared fixtures for the meal planner tests."""

import random

import pytest

from mealplanner.models.food import FoodCatalogEntry, FoodCategory
from mealplanner.models.nutrients import NutrientVector
from mealplanner.nsga2.types import Gene, ObjectiveScore, Solution


def _food(name, category, calories, carbs, protein, fat, **tags):
    return FoodCatalogEntry(
        name=name,
        category=FoodCategory(category),
        nutrients=NutrientVector(calories=calories, carbs=carbs, protein=protein, fat=fat),
        **tags,
    )


@pytest.fixture
def catalog():
    """Calorie-dense catalog: 2 staples and 10 non-staples (per 100 g)."""
    return [
        _food("Fried rice", "staple", 450, 60, 9, 19, flavors=["savory"], cooking_methods=["fry"]),
        _food("Egg noodles", "staple", 400, 70, 13, 7, flavors=["plain"], cooking_methods=["boil"]),
        _food("Pork belly", "meat", 500, 0, 14, 48, religious_restrictions=["pork"],
              flavors=["savory"], cooking_methods=["roast"]),
        _food("Chicken thigh", "meat", 230, 0, 25, 14, flavors=["savory"], cooking_methods=["grill"]),
        _food("Croissant", "pastry", 420, 45, 8, 22, allergens=["gluten"], flavors=["sweet"],
              cooking_methods=["bake"]),
        _food("Whole milk", "milk", 65, 5, 3.3, 3.6, allergens=["lactose"], flavors=["sweet"]),
        _food("Fried tofu", "bean", 270, 9, 17, 20, allergens=["soy"], cooking_methods=["fry"]),
        _food("Banana", "fruit", 90, 23, 1.1, 0.3, flavors=["sweet"]),
        _food("Mixed nuts", "other", 600, 20, 18, 52, allergens=["peanut"], flavors=["salty"],
              cooking_methods=["roast"]),
        _food("Fried eggplant", "vegetable", 250, 12, 1.5, 22, flavors=["savory"],
              cooking_methods=["fry"], spice_level=3),
        _food("Broccoli", "vegetable", 35, 7, 2.8, 0.4, flavors=["bitter"], cooking_methods=["steam"]),
        _food("Olive oil", "oil", 884, 0, 0, 100, cooking_methods=["raw"]),
    ]


@pytest.fixture
def foods(catalog):
    """Catalog entries by name."""
    return {food.name: food for food in catalog}


@pytest.fixture
def target():
    return NutrientVector(calories=2000, carbs=250, protein=75, fat=67)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_solution(foods):
    """Build a Solution from (food name, grams) pairs."""
    def _make(*items):
        return Solution(Gene(foods[name], grams) for name, grams in items)
    return _make


@pytest.fixture
def scored():
    """Build a bare Solution carrying the given objective values."""
    def _scored(*values, names=None):
        solution = Solution()
        names = names or [f"obj{i}" for i in range(len(values))]
        solution.objectives = [ObjectiveScore(n, v) for n, v in zip(names, values)]
        return solution
    return _scored
