"""Mutation strategies for meal Solutions.

Each strategy takes (solution, context, rng) and returns (solution, changed).
changed is False when the strategy had nothing to do (no candidate food, a
food-count limit reached, a gap too small to act on); the input solution is
then returned unchanged. Strategies never mutate their input.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import DEFAULT_NUTRIENT_WEIGHTS
from ..models.food import FoodCatalogEntry
from ..models.nutrients import NutrientVector
from .achievement import Band, achievement_ratios, band_distance
from .config import MutationType
from .initialization import random_gene
from .types import Solution

logger = logging.getLogger(__name__)

# Calorie gap (kcal) below which rebalancing is skipped
MIN_CALORIE_GAP = 20.0
# Foods denser than this (kcal per 100 g) are preferred for calorie rebalancing
CALORIE_DENSE_THRESHOLD = 100.0
# Fallback intake step (grams) when the computed change rounds away
MIN_CALORIE_STEP = 10
MAX_CALORIE_STEP = 30

# Sensitivity repair
MAX_SENSITIVITY_ADJUSTMENTS = 3
MIN_SENSITIVITY_CHANGE = 5
MIN_ADJUSTMENT_FACTOR = 0.05
MAX_ADJUSTMENT_FACTOR = 0.3

# Cumulative odds of each strategy under COMPREHENSIVE
COMPREHENSIVE_MIX: List[Tuple[float, MutationType]] = [
    (0.3, MutationType.NUTRIENT_SENSITIVITY),
    (0.6, MutationType.CALORIE_OPTIMIZATION),
    (0.7, MutationType.INTAKE_ADJUSTMENT),
    (0.8, MutationType.FOOD_REPLACEMENT),
    (0.9, MutationType.FOOD_ADDITION),
    (1.0, MutationType.FOOD_REMOVAL),
]


@dataclass
class MutationContext:
    """Read-only inputs the strategies need besides the solution."""

    catalog: Sequence[FoodCatalogEntry]
    target: NutrientVector
    bands: Dict[str, Band]
    require_staple: bool = True
    min_foods: int = 1
    max_foods: int = 8
    strength: float = 0.2
    nutrient_weights: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_NUTRIENT_WEIGHTS)
    )

    def unused_foods(self, solution: Solution) -> List[FoodCatalogEntry]:
        present = set(solution.food_names)
        return [food for food in self.catalog if food.name not in present]


MutationResult = Tuple[Solution, bool]
Strategy = Callable[[Solution, MutationContext, random.Random], MutationResult]


def _is_sole_staple(solution: Solution, index: int, context: MutationContext) -> bool:
    return (
        context.require_staple
        and solution.genes[index].is_staple
        and solution.staple_count == 1
    )


def mutate_intake(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Jitter one gene's intake around its normalized position in range."""
    if not solution.genes:
        return solution, False
    index = rng.randrange(len(solution.genes))
    gene = solution.genes[index]
    intake_range = gene.food.intake_range

    position = intake_range.normalized(gene.intake)
    position += rng.uniform(-1.0, 1.0) * context.strength
    position = max(0.0, min(1.0, position))
    new_intake = intake_range.clamp(intake_range.denormalized(position))
    if new_intake == gene.intake:
        return solution, False
    return solution.with_intake(index, new_intake), True


def replace_food(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Swap one gene for an unused food of the same category."""
    if not solution.genes:
        return solution, False
    index = rng.randrange(len(solution.genes))
    category = solution.genes[index].category
    candidates = [f for f in context.unused_foods(solution) if f.category == category]
    if not candidates:
        return solution, False
    food = rng.choice(candidates)
    return solution.with_replaced_gene(index, random_gene(food, rng)), True


def add_food(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Append an unused food.

    A missing required staple is added first; otherwise no second staple
    is introduced when one is required.
    """
    if len(solution.genes) >= context.max_foods:
        return solution, False
    candidates = context.unused_foods(solution)
    if context.require_staple:
        if solution.staple_count == 0:
            candidates = [f for f in candidates if f.is_staple]
        else:
            candidates = [f for f in candidates if not f.is_staple]
    if not candidates:
        return solution, False
    food = rng.choice(candidates)
    return solution.with_gene(random_gene(food, rng)), True


def remove_food(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Drop one gene, never the sole required staple."""
    if len(solution.genes) <= max(1, context.min_foods):
        return solution, False
    removable = [
        i for i in range(len(solution.genes)) if not _is_sole_staple(solution, i, context)
    ]
    if not removable:
        return solution, False
    return solution.without_gene(rng.choice(removable)), True


def optimize_calories(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Move a calorie-dense gene's intake to close the calorie gap."""
    gap = context.target.calories - solution.totals.calories
    if abs(gap) < MIN_CALORIE_GAP:
        return solution, False

    energetic = [
        i for i, g in enumerate(solution.genes) if g.food.nutrients.calories > 0
    ]
    dense = [
        i for i in energetic
        if solution.genes[i].food.nutrients.calories > CALORIE_DENSE_THRESHOLD
    ]
    candidates = dense or energetic
    if not candidates:
        return solution, False

    index = rng.choice(candidates)
    gene = solution.genes[index]
    grams_needed = gap / (gene.food.nutrients.calories / 100.0)
    new_intake = gene.food.intake_range.clamp(gene.intake + grams_needed)
    if new_intake == gene.intake:
        step = rng.randint(MIN_CALORIE_STEP, MAX_CALORIE_STEP)
        new_intake = gene.food.intake_range.clamp(
            gene.intake + step if gap > 0 else gene.intake - step
        )
    if new_intake == gene.intake:
        return solution, False
    return solution.with_intake(index, new_intake), True


def _worst_nutrient(
    ratios: Dict[str, float], context: MutationContext
) -> Optional[str]:
    """Out-of-band nutrient with the largest weighted band distance."""
    worst, worst_score = None, 0.0
    for name, ratio in ratios.items():
        distance = band_distance(ratio, context.bands[name])
        score = distance * context.nutrient_weights.get(name, 1.0)
        if score > worst_score:
            worst, worst_score = name, score
    return worst


def nutrient_sensitivity(
    solution: Solution, context: MutationContext, rng: random.Random
) -> MutationResult:
    """Directed repair of the worst out-of-band nutrient.

    Ranks genes by their share of that nutrient and scales the intakes of up
    to three top contributors by a factor proportional to the band distance
    and the share. A change smaller than 5 g is not applied.
    """
    ratios = achievement_ratios(solution.totals, context.target, list(context.bands))
    nutrient = _worst_nutrient(ratios, context)
    if nutrient is None:
        fallback = rng.choice([mutate_intake, add_food, replace_food])
        return fallback(solution, context, rng)

    total = solution.totals.get(nutrient)
    ratio = ratios[nutrient]
    min_rate, max_rate = context.bands[nutrient]
    increase = ratio < min_rate
    distance = abs(ratio - (min_rate if increase else max_rate))

    contributions: List[Tuple[float, int]] = []
    if total > 0:
        for index, gene in enumerate(solution.genes):
            share = gene.nutrients().get(nutrient) / total
            if share > 0:
                contributions.append((share, index))
    contributions.sort(key=lambda item: (-item[0], item[1]))

    updated = solution
    changed = False
    for share, index in contributions[:MAX_SENSITIVITY_ADJUSTMENTS]:
        gene = updated.genes[index]
        factor = min(MAX_ADJUSTMENT_FACTOR, max(MIN_ADJUSTMENT_FACTOR, distance * 0.5))
        factor *= min(1.0, share * 2)
        scaled = gene.intake * (1 + factor if increase else 1 - factor)
        new_intake = gene.food.intake_range.clamp(scaled)
        if abs(new_intake - gene.intake) >= MIN_SENSITIVITY_CHANGE:
            updated = updated.with_intake(index, new_intake)
            changed = True

    if not changed:
        if increase:
            return add_food(solution, context, rng)
        return solution, False
    logger.debug(
        f"Sensitivity repair on {nutrient} (ratio {ratio:.2f}, "
        f"{'increase' if increase else 'decrease'})"
    )
    return updated, True


STRATEGIES: Dict[MutationType, Strategy] = {
    MutationType.INTAKE_ADJUSTMENT: mutate_intake,
    MutationType.FOOD_REPLACEMENT: replace_food,
    MutationType.FOOD_ADDITION: add_food,
    MutationType.FOOD_REMOVAL: remove_food,
    MutationType.CALORIE_OPTIMIZATION: optimize_calories,
    MutationType.NUTRIENT_SENSITIVITY: nutrient_sensitivity,
}


def pick_comprehensive(rng: random.Random) -> MutationType:
    roll = rng.random()
    for threshold, mutation_type in COMPREHENSIVE_MIX:
        if roll < threshold:
            return mutation_type
    return COMPREHENSIVE_MIX[-1][1]


def mutate(
    solution: Solution,
    mutation_type: MutationType,
    context: MutationContext,
    rng: random.Random,
) -> MutationResult:
    """Apply one mutation strategy, drawing one when mutation_type is COMPREHENSIVE."""
    if mutation_type == MutationType.COMPREHENSIVE:
        mutation_type = pick_comprehensive(rng)
    return STRATEGIES[mutation_type](solution, context, rng)


def maybe_mutate(
    solution: Solution,
    mutation_rate: float,
    mutation_type: MutationType,
    context: MutationContext,
    rng: random.Random,
) -> MutationResult:
    """Mutate with probability mutation_rate."""
    if rng.random() >= mutation_rate:
        return solution, False
    return mutate(solution, mutation_type, context, rng)
