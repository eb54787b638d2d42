"""Objective evaluators for meal Solutions.

Every evaluator exposes evaluate(solution, target) -> ObjectiveScore with a
value in [0, 1] where higher is better. The MultiObjectiveEvaluator composes
one NutrientObjective per tracked nutrient with the preference, diversity
and balance objectives.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..config import (
    BALANCE_WEIGHT,
    CALORIES_PER_GRAM,
    DIVERSITY_WEIGHT,
    EXCESS_PENALIZED_NUTRIENTS,
    IDEAL_CATEGORY_DISTRIBUTION,
    MAX_SPICE_LEVEL,
    NUTRIENT_HARD_THRESHOLD,
    PREFERENCE_WEIGHT,
    PROTEIN_SOURCE_CATEGORIES,
)
from ..models.food import FoodCatalogEntry, FoodCategory
from ..models.nutrients import NutrientVector
from ..models.profile import MacroSplit, UserProfile
from .achievement import Band
from .types import ObjectiveScore, Solution


# Score range inside the band is [IN_BAND_FLOOR, 1.0]
IN_BAND_FLOOR = 0.8


class ObjectiveEvaluator(ABC):
    """Scores one aspect of a Solution against a nutrient target."""

    name: str
    weight: float

    @abstractmethod
    def evaluate(self, solution: Solution, target: NutrientVector) -> ObjectiveScore:
        """Return the score of this objective for the solution."""


# Nutrient scoring strategies: (ratio, band) -> score


def in_band_score(ratio: float, band: Band) -> float:
    """0.8 at the band edges rising linearly to 1.0 at the band center."""
    min_rate, max_rate = band
    half_width = (max_rate - min_rate) / 2
    if half_width <= 0:
        return 1.0
    center = min_rate + half_width
    return 1.0 - (abs(ratio - center) / half_width) * (1.0 - IN_BAND_FLOOR)


def _exponential_excess(ratio: float, max_rate: float) -> float:
    if max_rate <= 0:
        return 0.0
    return IN_BAND_FLOOR * math.exp(-(ratio - max_rate) / max_rate)


def calorie_score(ratio: float, band: Band) -> float:
    """Quadratic decay below the band, exponential above it."""
    min_rate, max_rate = band
    if ratio < min_rate:
        return IN_BAND_FLOOR * (ratio / min_rate) ** 2
    if ratio > max_rate:
        return _exponential_excess(ratio, max_rate)
    return in_band_score(ratio, band)


def default_score(ratio: float, band: Band) -> float:
    """Linear decay below the band, inverse-proportional decay above it."""
    min_rate, max_rate = band
    if ratio < min_rate:
        return IN_BAND_FLOOR * ratio / min_rate
    if ratio > max_rate:
        return IN_BAND_FLOOR * max_rate / ratio
    return in_band_score(ratio, band)


def strict_excess_score(ratio: float, band: Band) -> float:
    """Linear decay below the band, exponential above it."""
    min_rate, max_rate = band
    if ratio < min_rate:
        return IN_BAND_FLOOR * ratio / min_rate
    if ratio > max_rate:
        return _exponential_excess(ratio, max_rate)
    return in_band_score(ratio, band)


ScoringStrategy = Callable[[float, Band], float]


def scoring_strategy_for(nutrient: str) -> ScoringStrategy:
    if nutrient == "calories":
        return calorie_score
    if nutrient in EXCESS_PENALIZED_NUTRIENTS:
        return strict_excess_score
    return default_score


class NutrientObjective(ObjectiveEvaluator):
    """Scores how close one nutrient's achievement ratio is to its band."""

    def __init__(
        self,
        nutrient: str,
        band: Band,
        weight: float = 1.0,
        hard_threshold: float = NUTRIENT_HARD_THRESHOLD,
        strategy: Optional[ScoringStrategy] = None,
    ):
        self.name = nutrient
        self.nutrient = nutrient
        self.band = band
        self.weight = weight
        self.hard_threshold = hard_threshold
        self.strategy = strategy or scoring_strategy_for(nutrient)

    def score_value(self, actual: float, target: float) -> float:
        if target <= 0:
            return 1.0 if actual == 0 else 0.0
        value = self.strategy(actual / target, self.band)
        return max(0.0, min(1.0, value))

    def evaluate(self, solution: Solution, target: NutrientVector) -> ObjectiveScore:
        value = self.score_value(
            solution.totals.get(self.nutrient), target.get(self.nutrient)
        )
        return ObjectiveScore(
            name=self.name,
            value=value,
            weight=self.weight,
            is_hard_constraint=True,
            hard_threshold=self.hard_threshold,
        )


@dataclass(frozen=True)
class PreferenceFactors:
    """Penalty and bonus constants used by the preference objective."""

    allergen_penalty: float = 1.0
    religious_penalty: float = 1.0
    dislike_penalty: float = 0.8
    spice_penalty: float = 0.6
    flavor_bonus: float = 0.2
    flavor_weight: float = 0.3
    violation_threshold: float = 0.1
    violation_decay: float = 0.5


DEFAULT_PREFERENCE_FACTORS = PreferenceFactors()


class PreferenceObjective(ObjectiveEvaluator):
    """Scores how well the foods fit the user's restrictions and tastes.

    Each food starts at 1.0, loses fixed penalties for allergens, religious
    restrictions, dislikes and excess spice, and gains a small bonus per liked
    flavor. The meal score is the food average multiplied by
    violation_decay ** violations, a violation being a food scoring below
    violation_threshold.
    """

    name = "preference"

    def __init__(
        self,
        profile: Optional[UserProfile] = None,
        factors: PreferenceFactors = DEFAULT_PREFERENCE_FACTORS,
        weight: float = PREFERENCE_WEIGHT,
    ):
        self.profile = profile
        self.factors = factors
        self.weight = weight

    def food_score(self, food: FoodCatalogEntry) -> float:
        if self.profile is None:
            return 1.0
        factors = self.factors
        score = 1.0
        score -= factors.allergen_penalty * self.profile.allergen_matches(food)
        score -= factors.religious_penalty * self.profile.religious_matches(food)
        if self.profile.dislikes(food):
            score -= factors.dislike_penalty
        if food.spice_level > self.profile.spice_tolerance:
            excess = food.spice_level - self.profile.spice_tolerance
            score -= factors.spice_penalty * excess / MAX_SPICE_LEVEL
        flavor_matches = self.profile.liked_flavor_matches(food)
        score += factors.flavor_bonus * flavor_matches * factors.flavor_weight
        return max(0.0, min(1.0, score))

    def score_value(self, solution: Solution) -> float:
        if not solution.genes:
            return 0.0
        if self.profile is None:
            return 1.0
        scores = [self.food_score(gene.food) for gene in solution.genes]
        violations = sum(1 for s in scores if s < self.factors.violation_threshold)
        average = sum(scores) / len(scores)
        return average * self.factors.violation_decay ** violations

    def evaluate(self, solution: Solution, target: NutrientVector) -> ObjectiveScore:
        return ObjectiveScore(
            name=self.name, value=self.score_value(solution), weight=self.weight
        )


class DiversityObjective(ObjectiveEvaluator):
    """Scores the variety of a meal.

    Blends category coverage and distribution against an ideal category mix,
    attribute variety (cooking methods, flavors, spice levels) and whether the
    meal combines a staple, a vegetable and a protein source.
    """

    name = "diversity"

    def __init__(
        self,
        weight: float = DIVERSITY_WEIGHT,
        ideal_distribution: Optional[Dict[str, float]] = None,
        category_weight: float = 0.6,
        attribute_weight: float = 0.2,
        combination_weight: float = 0.2,
    ):
        self.weight = weight
        self.ideal_distribution = ideal_distribution or dict(IDEAL_CATEGORY_DISTRIBUTION)
        self.category_weight = category_weight
        self.attribute_weight = attribute_weight
        self.combination_weight = combination_weight

    def category_score(self, solution: Solution) -> float:
        counts = {c.value: n for c, n in solution.category_counts().items()}
        total = len(solution.genes)
        covered = sum(1 for c in self.ideal_distribution if counts.get(c, 0) > 0)
        coverage = covered / len(self.ideal_distribution)

        similarities = []
        for category, ideal_share in self.ideal_distribution.items():
            actual_share = counts.get(category, 0) / total
            similarities.append(1.0 - min(1.0, abs(ideal_share - actual_share) * 3))
        distribution = sum(similarities) / len(similarities)

        return 0.2 * coverage + 0.8 * distribution

    @staticmethod
    def attribute_score(solution: Solution) -> float:
        methods = set()
        flavors = set()
        spice_levels = set()
        for gene in solution.genes:
            methods.update(gene.food.cooking_methods)
            flavors.update(gene.food.flavors)
            spice_levels.add(gene.food.spice_level)
        return (
            0.4 * min(1.0, len(methods) / 2)
            + 0.4 * min(1.0, len(flavors) / 3)
            + 0.2 * min(1.0, len(spice_levels) / 2)
        )

    @staticmethod
    def combination_score(solution: Solution) -> float:
        counts = solution.category_counts()
        has_protein = any(
            counts.get(FoodCategory(c), 0) > 0 for c in PROTEIN_SOURCE_CATEGORIES
        )
        hits = [
            counts.get(FoodCategory.STAPLE, 0) > 0,
            counts.get(FoodCategory.VEGETABLE, 0) > 0,
            has_protein,
        ]
        score = sum(hits) / len(hits)
        # Crowding one category is penalized
        for count in counts.values():
            if count > 3:
                score -= 0.05 * (count - 3)
        return max(0.0, min(1.0, score))

    def score_value(self, solution: Solution) -> float:
        if not solution.genes:
            return 0.0
        return (
            self.category_weight * self.category_score(solution)
            + self.attribute_weight * self.attribute_score(solution)
            + self.combination_weight * self.combination_score(solution)
        )

    def evaluate(self, solution: Solution, target: NutrientVector) -> ObjectiveScore:
        return ObjectiveScore(
            name=self.name, value=self.score_value(solution), weight=self.weight
        )


class BalanceObjective(ObjectiveEvaluator):
    """Scores macro balance and intake sensibility.

    score = 0.6 * macro closeness + 0.4 * (0.6 * calorie closeness
    + 0.4 * average per-food closeness to the category default intake)
    """

    name = "balance"

    def __init__(
        self,
        macro_split: Optional[MacroSplit] = None,
        weight: float = BALANCE_WEIGHT,
        macro_weight: float = 0.6,
        intake_weight: float = 0.4,
    ):
        self.macro_split = macro_split or MacroSplit()
        self.weight = weight
        self.macro_weight = macro_weight
        self.intake_weight = intake_weight

    def macro_score(self, totals: NutrientVector) -> float:
        energy = {
            macro: totals.get(macro) * kcal for macro, kcal in CALORIES_PER_GRAM.items()
        }
        total_energy = sum(energy.values())
        if total_energy <= 0:
            return 0.0
        difference = sum(
            abs(energy[macro] / total_energy - self.macro_split.share(macro))
            for macro in energy
        )
        return max(0.0, 1.0 - difference)

    @staticmethod
    def calorie_score(actual: float, target: float) -> float:
        if target <= 0:
            return 1.0 if actual == 0 else 0.0
        return 1.0 - min(1.0, abs(actual - target) / target)

    @staticmethod
    def food_intake_score(solution: Solution) -> float:
        scores = []
        for gene in solution.genes:
            intake_range = gene.food.intake_range
            actual = intake_range.normalized(gene.intake)
            ideal = intake_range.normalized(intake_range.default_grams)
            scores.append(1.0 - min(1.0, abs(actual - ideal) * 2))
        return sum(scores) / len(scores)

    def score_value(self, solution: Solution, target: NutrientVector) -> float:
        if not solution.genes:
            return 0.0
        totals = solution.totals
        intake = 0.6 * self.calorie_score(
            totals.calories, target.calories
        ) + 0.4 * self.food_intake_score(solution)
        return self.macro_weight * self.macro_score(totals) + self.intake_weight * intake

    def evaluate(self, solution: Solution, target: NutrientVector) -> ObjectiveScore:
        return ObjectiveScore(
            name=self.name, value=self.score_value(solution, target), weight=self.weight
        )
