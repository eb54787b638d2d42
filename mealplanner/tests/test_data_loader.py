"""Tests for data loader module."""

import pytest
from mealplanner.data_loader import load_food_catalog
from mealplanner.models.food import FoodCategory


def test_load_catalog_empty_file(tmp_path):
    """Test loading a catalog with only a header."""
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text("name,category\n")

    foods = load_food_catalog(str(csv_path))

    assert foods == []


def test_load_catalog_with_data(tmp_path):
    """Test loading a catalog with nutrients and tags."""
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text(
        "name,category,calories,carbs,protein,fat,sodium,allergens,flavors,spice_level\n"
        "Steamed rice,staple,116,25.9,2.6,0.3,1,,plain,0\n"
        "Kung pao chicken,Meat,200,8,18,11,600,peanut|soy,spicy|savory,4\n"
        "Seaweed,algae,45,9,1.5,0.6,,,,\n"
    )

    foods = load_food_catalog(str(csv_path))

    assert [f.name for f in foods] == ["Steamed rice", "Kung pao chicken", "Seaweed"]
    rice, chicken, seaweed = foods
    assert rice.category == FoodCategory.STAPLE
    assert rice.nutrients.calories == pytest.approx(116)
    assert chicken.category == FoodCategory.MEAT
    assert chicken.allergens == ("peanut", "soy")
    assert chicken.flavors == ("spicy", "savory")
    assert chicken.spice_level == 4
    assert chicken.nutrients.sodium == pytest.approx(600)
    assert seaweed.category == FoodCategory.OTHER
    assert seaweed.nutrients.sodium == 0.0
    assert seaweed.allergens == ()
    assert seaweed.nutrients.iron == 0.0


def test_load_catalog_skips_duplicates_and_blank_names(tmp_path):
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text(
        "name,category,calories\n"
        "Apple,fruit,52\n"
        ",fruit,10\n"
        "Apple,fruit,99\n"
    )

    foods = load_food_catalog(str(csv_path))

    assert len(foods) == 1
    assert foods[0].nutrients.calories == pytest.approx(52)


def test_load_catalog_custom_separator(tmp_path):
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text("name;category;protein\nTofu;bean;8\n")

    foods = load_food_catalog(str(csv_path), sep=";")

    assert foods[0].category == FoodCategory.BEAN
    assert foods[0].nutrients.protein == pytest.approx(8)


def test_load_catalog_missing_column(tmp_path):
    csv_path = tmp_path / "foods.csv"
    csv_path.write_text("name,calories\nApple,52\n")

    with pytest.raises(ValueError):
        load_food_catalog(str(csv_path))


def test_load_catalog_missing_file(tmp_path):
    foods = load_food_catalog(str(tmp_path / "missing.csv"))

    assert foods == []
