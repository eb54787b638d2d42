"""Type definitions for the NSGA-II meal search.

Contains the Gene (food + grams) and Solution (meal candidate) classes.
A Solution's genes never change after construction; operators build a new
Solution through the with_* builders, so the cached nutrient total is
always consistent with the genes.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.food import FoodCatalogEntry, FoodCategory
from ..models.nutrients import NutrientVector


@dataclass(frozen=True)
class Gene:
    """One food of a meal and its intake in whole grams."""

    food: FoodCatalogEntry
    intake: int

    @property
    def name(self) -> str:
        return self.food.name

    @property
    def category(self) -> FoodCategory:
        return self.food.category

    @property
    def is_staple(self) -> bool:
        return self.food.is_staple

    def nutrients(self) -> NutrientVector:
        return self.food.nutrients_for(self.intake)

    def with_intake(self, grams: float) -> "Gene":
        """Same food at a new intake, rounded and clamped into its range."""
        return Gene(self.food, self.food.intake_range.clamp(grams))

    def __repr__(self) -> str:
        return f"{self.food.name}({self.intake}g)"


@dataclass(frozen=True)
class ObjectiveScore:
    """Score of one objective; higher is better."""

    name: str
    value: float
    weight: float = 1.0
    is_hard_constraint: bool = False
    hard_threshold: float = 0.0

    @property
    def weighted_value(self) -> float:
        return self.value * self.weight

    @property
    def hard_constraint_satisfied(self) -> bool:
        """Soft objectives always pass."""
        return not self.is_hard_constraint or self.value >= self.hard_threshold


class Solution:
    """A candidate meal: an ordered list of Genes plus NSGA-II annotations.

    Attributes:
        genes: Tuple of genes, unique by food name in a valid Solution
        rank: Front index after sorting (0 = unranked, 1 = best front)
        crowding_distance: Crowding distance within its front
        objectives: Score vector set by the evaluator
    """

    def __init__(self, genes: Iterable[Gene] = ()):
        self.genes: Tuple[Gene, ...] = tuple(genes)
        self.rank: int = 0
        self.crowding_distance: float = 0.0
        self.objectives: List[ObjectiveScore] = []
        self._totals: Optional[NutrientVector] = None

    @property
    def totals(self) -> NutrientVector:
        """Total nutrients of the meal, computed on first access."""
        if self._totals is None:
            self._totals = NutrientVector.total(gene.nutrients() for gene in self.genes)
        return self._totals

    def __len__(self) -> int:
        return len(self.genes)

    @property
    def food_names(self) -> List[str]:
        return [gene.name for gene in self.genes]

    @property
    def staple_count(self) -> int:
        return sum(1 for gene in self.genes if gene.is_staple)

    def staple_indices(self) -> List[int]:
        return [i for i, gene in enumerate(self.genes) if gene.is_staple]

    def contains_food(self, name: str) -> bool:
        return any(gene.name == name for gene in self.genes)

    def category_counts(self) -> Dict[FoodCategory, int]:
        return dict(Counter(gene.category for gene in self.genes))

    @property
    def objective_values(self) -> List[float]:
        return [score.value for score in self.objectives]

    def score(self, name: str) -> Optional[ObjectiveScore]:
        for objective in self.objectives:
            if objective.name == name:
                return objective
        return None

    # Builders

    def with_intake(self, index: int, grams: float) -> "Solution":
        genes = list(self.genes)
        genes[index] = genes[index].with_intake(grams)
        return Solution(genes)

    def with_gene(self, gene: Gene) -> "Solution":
        return Solution(self.genes + (gene,))

    def without_gene(self, index: int) -> "Solution":
        genes = list(self.genes)
        del genes[index]
        return Solution(genes)

    def with_replaced_gene(self, index: int, gene: Gene) -> "Solution":
        genes = list(self.genes)
        genes[index] = gene
        return Solution(genes)

    def copy(self) -> "Solution":
        """Clone with the same genes, rank, crowding distance and scores."""
        clone = Solution(self.genes)
        clone.rank = self.rank
        clone.crowding_distance = self.crowding_distance
        clone.objectives = list(self.objectives)
        clone._totals = self._totals
        return clone

    def dominates(self, other: "Solution") -> bool:
        """True if at least as good everywhere and strictly better somewhere.

        Raises:
            ValueError: If the score vectors differ in length or order
        """
        if len(self.objectives) != len(other.objectives):
            raise ValueError(
                f"Cannot compare score vectors of length {len(self.objectives)} "
                f"and {len(other.objectives)}"
            )
        strictly_better = False
        for mine, theirs in zip(self.objectives, other.objectives):
            if mine.name != theirs.name:
                raise ValueError(
                    f"Score vectors out of order: {mine.name} vs {theirs.name}"
                )
            if mine.value < theirs.value:
                return False
            if mine.value > theirs.value:
                strictly_better = True
        return strictly_better

    def __repr__(self) -> str:
        foods = ", ".join(repr(gene) for gene in self.genes)
        scores = ", ".join(f"{s.name}={s.value:.3f}" for s in self.objectives)
        return (
            f"Solution(rank={self.rank}, crowding={self.crowding_distance:.3f}, "
            f"foods=[{foods}], objectives=[{scores}])"
        )
