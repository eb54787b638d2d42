"""Tests for building and running the planner from settings."""

import logging

import pytest
from mealplanner.config import Config
from mealplanner.models.nutrients import NutrientVector
from mealplanner.nsga2.initialization import EmptyCatalogError
from mealplanner.runner import initialize_planner, run_meal_search

CATALOG_CSV = (
    "name;category;calories;carbs;protein;fat\n"
    "Steamed rice;staple;116;25.9;2.6;0.3\n"
    "Chicken breast;meat;165;0;31;3.6\n"
    "Broccoli;vegetable;35;7;2.8;0.4\n"
    "Tofu;bean;76;1.9;8;4.8\n"
    "Apple;fruit;52;14;0.3;0.2\n"
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def settings(tmp_path):
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text(CATALOG_CSV)
    return Config(
        LOG_FILE=str(tmp_path / "planner.log"),
        POPULATION_SIZE=8,
        MAX_GENERATIONS=2,
        MIN_FOODS_PER_MEAL=2,
        MAX_FOODS_PER_MEAL=4,
        RANDOM_SEED=1,
        FOOD_CATALOG_CSV=str(csv_path),
        FOOD_CATALOG_SEPARATOR=";",
    )


def test_initialize_planner_from_settings(settings):
    planner = initialize_planner(settings)

    assert [food.name for food in planner.catalog][:2] == ["Steamed rice", "Chicken breast"]
    assert len(planner.catalog) == 5
    assert planner.config.population_size == 8
    assert planner.config.seed == 1
    assert (planner.config.min_foods_per_meal, planner.config.max_foods_per_meal) == (2, 4)


def test_initialize_planner_with_given_catalog(settings, catalog):
    planner = initialize_planner(settings, catalog=catalog, bands={"calories": (0.9, 1.1)})

    assert planner.catalog == list(catalog)
    assert planner.evaluator.objective_names[0] == "calories"


def test_run_meal_search_writes_logs(settings, tmp_path, restore_logging):
    settings.GENERATION_LOG_FILE = str(tmp_path / "generations.jsonl")
    target = NutrientVector(calories=700, carbs=90, protein=40, fat=15)

    result = run_meal_search(target, settings)

    assert len(result) >= 1
    assert all(solution.staple_count == 1 for solution in result)
    lines = (tmp_path / "generations.jsonl").read_text().splitlines()
    assert len(lines) == result.generations_run + 1
    assert (tmp_path / "planner.log").exists()


def test_run_meal_search_with_missing_catalog(tmp_path, restore_logging):
    settings = Config(LOG_FILE=None, FOOD_CATALOG_CSV=str(tmp_path / "missing.csv"))

    with pytest.raises(EmptyCatalogError):
        run_meal_search(NutrientVector(calories=700), settings)
