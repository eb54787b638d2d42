"""Random Solution and Population creation."""

import logging
import random
from typing import Dict, List, Sequence

from ..config import CATEGORY_SELECTION_WEIGHTS
from ..models.food import FoodCatalogEntry, FoodCategory
from .config import NSGAIIConfig
from .population import Population
from .types import Gene, Solution

logger = logging.getLogger(__name__)


class EmptyCatalogError(ValueError):
    """The catalog cannot seed a single Solution."""


def check_catalog(catalog: Sequence[FoodCatalogEntry], require_staple: bool) -> None:
    """Fail fast on catalogs that can never yield a valid Solution.

    Raises:
        EmptyCatalogError: If the catalog is empty, or lacks a staple while
            one is required
    """
    if not catalog:
        raise EmptyCatalogError("Food catalog is empty")
    if require_staple and not any(food.is_staple for food in catalog):
        raise EmptyCatalogError("Food catalog has no staple food but a staple is required")


def random_gene(food: FoodCatalogEntry, rng: random.Random) -> Gene:
    """Gene for the food at a uniformly random whole-gram intake in range."""
    intake_range = food.intake_range
    return Gene(food, rng.randint(intake_range.lower, intake_range.upper))


def pick_weighted_food(
    candidates: Sequence[FoodCatalogEntry], rng: random.Random
) -> FoodCatalogEntry:
    """Pick a category by selection weight, then a uniform food within it."""
    by_category: Dict[FoodCategory, List[FoodCatalogEntry]] = {}
    for food in candidates:
        by_category.setdefault(food.category, []).append(food)
    categories = list(by_category)
    weights = [CATEGORY_SELECTION_WEIGHTS.get(c.value, 0.05) for c in categories]
    category = rng.choices(categories, weights=weights, k=1)[0]
    return rng.choice(by_category[category])


def create_random_solution(
    catalog: Sequence[FoodCatalogEntry],
    min_foods: int,
    max_foods: int,
    require_staple: bool,
    rng: random.Random,
) -> Solution:
    """Build a random meal.

    With require_staple, one random staple comes first; the rest are distinct
    non-staple foods up to a random count in [min_foods, max_foods].
    """
    check_catalog(catalog, require_staple)

    genes: List[Gene] = []
    if require_staple:
        staples = [food for food in catalog if food.is_staple]
        genes.append(random_gene(rng.choice(staples), rng))

    target_count = rng.randint(min_foods, max_foods)
    used = {gene.name for gene in genes}
    pool = [
        food for food in catalog
        if not (require_staple and food.is_staple) and food.name not in used
    ]
    while len(genes) < target_count and pool:
        food = pick_weighted_food(pool, rng)
        pool = [other for other in pool if other.name != food.name]
        genes.append(random_gene(food, rng))

    return Solution(genes)


def initialize_population(
    catalog: Sequence[FoodCatalogEntry],
    config: NSGAIIConfig,
    require_staple: bool,
    rng: random.Random,
) -> Population:
    """Create generation 0 of config.population_size random Solutions."""
    check_catalog(catalog, require_staple)
    solutions = [
        create_random_solution(
            catalog,
            config.min_foods_per_meal,
            config.max_foods_per_meal,
            require_staple,
            rng,
        )
        for _ in range(config.population_size)
    ]
    logger.debug(f"Initialized {len(solutions)} random solutions from {len(catalog)} foods")
    return Population(solutions, generation=0)
