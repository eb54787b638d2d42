"""Data loader module for parsing the food catalog CSV."""

import logging
from typing import List

import pandas as pd

from .config import NUTRIENT_NAMES
from .models.food import FoodCatalogEntry, FoodCategory
from .models.nutrients import NutrientVector

logger = logging.getLogger(__name__)

TAG_COLUMNS = ["allergens", "religious_restrictions", "flavors", "cooking_methods"]
TAG_SEPARATOR = "|"


def _parse_tags(value) -> List[str]:
    """Split a '|'-separated cell into lower-case tags."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [tag.strip().lower() for tag in str(value).split(TAG_SEPARATOR) if tag.strip()]


def _parse_float(value, default: float = 0.0) -> float:
    if value is None or pd.isna(value):
        return default
    return float(value)


def load_food_catalog(csv_path: str, sep: str = ",") -> List[FoodCatalogEntry]:
    """
    Parse a food catalog CSV into FoodCatalogEntry instances.

    Nutrient columns are amounts per 100 g and default to 0. Unknown
    categories become "other". Rows with a blank name are skipped and a
    repeated name keeps its first row.

    Args:
        csv_path: Path to the catalog CSV file
        sep: Column separator

    Returns:
        List of catalog entries in file order
    """
    foods: List[FoodCatalogEntry] = []

    try:
        df = pd.read_csv(csv_path, sep=sep)
        logger.info(f"Loaded food catalog CSV with {len(df)} rows")

        required_cols = ["name", "category"]
        for col in required_cols:
            if col not in df.columns:
                raise ValueError(f"Missing required column: {col}")

        seen = set()
        for _, row in df.iterrows():
            if pd.isna(row["name"]) or not str(row["name"]).strip():
                logger.debug("Skipping catalog row without a name")
                continue
            name = str(row["name"]).strip()
            if name in seen:
                logger.warning(f"Duplicate food '{name}' in catalog, keeping first row")
                continue
            seen.add(name)

            nutrients = NutrientVector(
                **{n: _parse_float(row.get(n)) for n in NUTRIENT_NAMES}
            )
            spice_level = int(_parse_float(row.get("spice_level"), 0))

            foods.append(
                FoodCatalogEntry(
                    name=name,
                    category=FoodCategory.from_string(row["category"]),
                    nutrients=nutrients,
                    spice_level=max(0, min(5, spice_level)),
                    **{col: _parse_tags(row.get(col)) for col in TAG_COLUMNS},
                )
            )

    except FileNotFoundError:
        logger.warning(f"Food catalog CSV not found at {csv_path}, using empty catalog")
    except Exception as e:
        logger.error(f"Error loading food catalog: {e}")
        raise

    return foods
