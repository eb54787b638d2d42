"""Validity checks for Solutions produced by the variation operators.

Invalid offspring are not patched; they are replaced by a fresh random
Solution until a valid one comes out.
"""

import random
from typing import Sequence

from ..models.food import FoodCatalogEntry
from .config import NSGAIIConfig
from .initialization import create_random_solution
from .types import Solution


def is_valid(solution: Solution, require_staple: bool) -> bool:
    """Non-empty, unique food names, in-range intakes and, when required,
    exactly one staple."""
    if not solution.genes:
        return False
    names = solution.food_names
    if len(set(names)) != len(names):
        return False
    for gene in solution.genes:
        if not gene.food.intake_range.contains(gene.intake):
            return False
    if require_staple and solution.staple_count != 1:
        return False
    return True


def ensure_valid(
    solution: Solution,
    catalog: Sequence[FoodCatalogEntry],
    config: NSGAIIConfig,
    require_staple: bool,
    rng: random.Random,
) -> Solution:
    """Return the solution if valid, otherwise a valid random replacement."""
    while not is_valid(solution, require_staple):
        solution = create_random_solution(
            catalog,
            config.min_foods_per_meal,
            config.max_foods_per_meal,
            require_staple,
            rng,
        )
    return solution
