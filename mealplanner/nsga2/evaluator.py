"""Multi-objective evaluation of Solutions."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from ..config import (
    DEFAULT_ACHIEVEMENT_BANDS,
    DEFAULT_NUTRIENT_WEIGHTS,
    GOOD_ENOUGH_THRESHOLD,
)
from ..models.nutrients import NutrientVector
from ..models.profile import MacroSplit, UserProfile
from .achievement import Band
from .objectives import (
    BalanceObjective,
    DEFAULT_PREFERENCE_FACTORS,
    DiversityObjective,
    NutrientObjective,
    ObjectiveEvaluator,
    PreferenceFactors,
    PreferenceObjective,
)
from .types import ObjectiveScore, Solution

logger = logging.getLogger(__name__)


class MultiObjectiveEvaluator:
    """Aggregates objective evaluators into a Solution's score vector.

    The score vector order is the order of self.objectives, which is fixed
    for a run so dominance comparisons line up.
    """

    def __init__(
        self,
        objectives: Sequence[ObjectiveEvaluator],
        good_enough_threshold: float = GOOD_ENOUGH_THRESHOLD,
    ):
        if not objectives:
            raise ValueError("At least one objective is required")
        names = [objective.name for objective in objectives]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate objective names: {names}")
        self.objectives = list(objectives)
        self.good_enough_threshold = good_enough_threshold

    @classmethod
    def create(
        cls,
        bands: Optional[Dict[str, Band]] = None,
        nutrient_weights: Optional[Dict[str, float]] = None,
        profile: Optional[UserProfile] = None,
        macro_split: Optional[MacroSplit] = None,
        preference_factors: PreferenceFactors = DEFAULT_PREFERENCE_FACTORS,
        good_enough_threshold: float = GOOD_ENOUGH_THRESHOLD,
    ) -> "MultiObjectiveEvaluator":
        """Build the standard objective set: one per tracked nutrient plus
        preference, diversity and balance.

        Args:
            bands: Achievement band per tracked nutrient (defaults to
                DEFAULT_ACHIEVEMENT_BANDS)
            nutrient_weights: Weight per nutrient (missing names weigh 1.0)
            profile: User profile for the preference objective
            macro_split: Ideal macro split for the balance objective
            preference_factors: Penalty constants for the preference objective
            good_enough_threshold: Aggregate score needed by is_good_enough
        """
        bands = dict(DEFAULT_ACHIEVEMENT_BANDS if bands is None else bands)
        weights = dict(DEFAULT_NUTRIENT_WEIGHTS)
        if nutrient_weights:
            weights.update(nutrient_weights)

        objectives: List[ObjectiveEvaluator] = [
            NutrientObjective(nutrient, band, weight=weights.get(nutrient, 1.0))
            for nutrient, band in bands.items()
        ]
        objectives.append(PreferenceObjective(profile, factors=preference_factors))
        objectives.append(DiversityObjective())
        objectives.append(BalanceObjective(macro_split))
        return cls(objectives, good_enough_threshold=good_enough_threshold)

    @property
    def objective_names(self) -> List[str]:
        return [objective.name for objective in self.objectives]

    def score(self, solution: Solution, target: NutrientVector) -> List[ObjectiveScore]:
        return [objective.evaluate(solution, target) for objective in self.objectives]

    def evaluate(self, solution: Solution, target: NutrientVector) -> Solution:
        """Attach the score vector to the solution and return it."""
        solution.objectives = self.score(solution, target)
        return solution

    def evaluate_all(
        self,
        solutions: Sequence[Solution],
        target: NutrientVector,
        parallel: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        """Score every solution, optionally in a thread pool.

        Scoring is a pure function of the solution and target, so the
        parallel path gives the same results as the sequential one. Threads
        share the interpreter lock, so pure-Python scoring gets no CPU
        parallelism from it.
        """
        if parallel and len(solutions) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                score_vectors = list(
                    executor.map(lambda s: self.score(s, target), solutions)
                )
            for solution, scores in zip(solutions, score_vectors):
                solution.objectives = scores
        else:
            for solution in solutions:
                self.evaluate(solution, target)

    @staticmethod
    def overall_score(solution: Solution) -> float:
        """Weighted average of the solution's objective values."""
        total_weight = sum(score.weight for score in solution.objectives)
        if total_weight <= 0:
            return 0.0
        return sum(score.weighted_value for score in solution.objectives) / total_weight

    @staticmethod
    def hard_constraints_satisfied(solution: Solution) -> bool:
        return all(score.hard_constraint_satisfied for score in solution.objectives)

    def is_good_enough(self, solution: Solution) -> bool:
        """All hard constraints pass and the aggregate score reaches the threshold."""
        if not solution.objectives:
            return False
        return (
            self.hard_constraints_satisfied(solution)
            and self.overall_score(solution) >= self.good_enough_threshold
        )
