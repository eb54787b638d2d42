"""Build and run a meal planner from application settings."""

import logging
from typing import List, Optional

from .config import Config
from .data_loader import load_food_catalog
from .logger import JSONLogger, configure_logging
from .models.food import FoodCatalogEntry
from .models.nutrients import NutrientVector
from .nsga2.config import NSGAIIConfig
from .nsga2.planner import NSGAIIMealPlanner, ParetoResult

logger = logging.getLogger(__name__)


def initialize_planner(
    settings: Optional[Config] = None,
    catalog: Optional[List[FoodCatalogEntry]] = None,
    json_logger: Optional[JSONLogger] = None,
    **planner_options,
) -> NSGAIIMealPlanner:
    """
    Initialize a planner from settings.

    Loads the food catalog from FOOD_CATALOG_CSV unless one is given and takes
    the search parameters from the settings.

    Args:
        settings: Application settings (read from the environment if None)
        catalog: Food catalog to use instead of the configured CSV
        json_logger: Per-generation JSON logger
        **planner_options: Passed to NSGAIIMealPlanner (bands, profile, ...)

    Returns:
        Initialized NSGAIIMealPlanner
    """
    settings = settings or Config()
    if catalog is None:
        catalog = load_food_catalog(settings.FOOD_CATALOG_CSV, sep=settings.FOOD_CATALOG_SEPARATOR)
        logger.info(f"Loaded {len(catalog)} foods from {settings.FOOD_CATALOG_CSV}")

    return NSGAIIMealPlanner(
        catalog,
        NSGAIIConfig.from_settings(settings),
        json_logger=json_logger,
        **planner_options,
    )


def run_meal_search(
    target: NutrientVector,
    settings: Optional[Config] = None,
    require_staple: bool = True,
    catalog: Optional[List[FoodCatalogEntry]] = None,
    **planner_options,
) -> ParetoResult:
    """
    Configure logging from settings and run one meal search.

    Per-generation statistics go to GENERATION_LOG_FILE when it is set.

    Raises:
        EmptyCatalogError: If the catalog cannot produce a valid meal
    """
    settings = settings or Config()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    if not settings.GENERATION_LOG_FILE:
        planner = initialize_planner(settings, catalog, **planner_options)
        return planner.generate_meal(target, require_staple)

    with JSONLogger(settings.GENERATION_LOG_FILE) as json_logger:
        planner = initialize_planner(settings, catalog, json_logger, **planner_options)
        return planner.generate_meal(target, require_staple)
