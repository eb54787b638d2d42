"""NSGA-II meal planner.

Key Design Decisions:
- Chromosome: ordered list of (food, grams) genes, one staple first when required
- Objectives: one score per tracked nutrient plus preference, diversity, balance
- Replacement: elitist, parents + offspring re-ranked and truncated by front
  then crowding distance
- Invalid offspring are replaced by a fresh random meal, never patched
- Termination: generation cap, or a large enough front 1 whose members are
  all good enough (optionally also a stall limit)
- Extraction: front-1 members with every tracked nutrient in band
  (VERIFIED), else the three closest ones, calories in band first and then
  by lowest weighted deviation (BEST_EFFORT)

Important:
- One random.Random(seed) drives every stochastic step, so a fixed seed
  reproduces the run
- Evaluation never draws random numbers; parallel evaluation gives the same
  results as sequential evaluation
"""

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..config import (
    DEFAULT_ACHIEVEMENT_BANDS,
    DEFAULT_NUTRIENT_WEIGHTS,
    FALLBACK_RESULT_COUNT,
    PRIMARY_NUTRIENT,
)
from ..logger import JSONLogger
from ..models.food import FoodCatalogEntry
from ..models.nutrients import NutrientVector
from ..models.profile import MacroSplit, UserProfile
from ..schemas.result_schemas import GeneSummary, ObjectiveSummary, SolutionSummary
from ..utils import format_meal, format_ratio, format_ratios
from .achievement import (
    Band,
    achievement_ratios,
    all_in_band,
    nutrient_in_band,
    weighted_deviation,
)
from .config import NSGAIIConfig
from .crowding import diversity_metric
from .evaluator import MultiObjectiveEvaluator
from .initialization import check_catalog, initialize_population
from .mutation import MutationContext, maybe_mutate
from .operators import crossover, select_parent
from .population import Population
from .repair import ensure_valid
from .types import Solution

logger = logging.getLogger(__name__)


class ResultKind(str, Enum):
    """Which extraction path produced a result."""

    VERIFIED = "verified"
    BEST_EFFORT = "best_effort"


@dataclass
class ParetoResult:
    """Ordered Pareto Solutions of one run, best first.

    Attributes:
        kind: VERIFIED if every solution has all tracked nutrients in band,
            BEST_EFFORT if the deviation-ranked fallback was used
        solutions: Non-empty list of solutions
        target: Nutrient target of the run
        bands: Achievement bands of the run
        generations_run: Number of completed generations
        terminated_early: True if the quality criterion stopped the loop
    """

    kind: ResultKind
    solutions: List[Solution]
    target: NutrientVector
    bands: Dict[str, Band] = field(default_factory=dict)
    generations_run: int = 0
    terminated_early: bool = False

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self):
        return iter(self.solutions)

    @property
    def is_verified(self) -> bool:
        return self.kind == ResultKind.VERIFIED

    @property
    def best(self) -> Solution:
        return self.solutions[0]

    def summaries(self) -> List[SolutionSummary]:
        return [summarize_solution(s, self.target, self.bands) for s in self.solutions]


def summarize_solution(
    solution: Solution, target: NutrientVector, bands: Dict[str, Band]
) -> SolutionSummary:
    """Plain-data view of one solution; infinite crowding becomes None."""
    crowding = solution.crowding_distance
    return SolutionSummary(
        foods=[
            GeneSummary(name=gene.name, category=gene.category.value, grams=gene.intake)
            for gene in solution.genes
        ],
        totals=solution.totals.as_dict(),
        achievement_ratios=achievement_ratios(solution.totals, target, list(bands)),
        objectives=[
            ObjectiveSummary(
                name=score.name,
                value=score.value,
                weight=score.weight,
                is_hard_constraint=score.is_hard_constraint,
                hard_threshold=score.hard_threshold,
                satisfied=score.hard_constraint_satisfied,
            )
            for score in solution.objectives
        ],
        rank=solution.rank,
        crowding_distance=None if math.isinf(crowding) else crowding,
        all_in_band=all_in_band(solution.totals, target, bands),
        deviation=weighted_deviation(solution.totals, target, bands),
    )


class NSGAIIMealPlanner:
    """Searches meal compositions approximating a nutrient target.

    The catalog, bands and evaluator are read-only for a run; each call to
    generate_meal starts a fresh random stream from config.seed.
    """

    def __init__(
        self,
        catalog: Sequence[FoodCatalogEntry],
        config: Optional[NSGAIIConfig] = None,
        bands: Optional[Dict[str, Band]] = None,
        nutrient_weights: Optional[Dict[str, float]] = None,
        profile: Optional[UserProfile] = None,
        macro_split: Optional[MacroSplit] = None,
        evaluator: Optional[MultiObjectiveEvaluator] = None,
        json_logger: Optional[JSONLogger] = None,
    ):
        """Initialize the planner.

        Args:
            catalog: Foods to compose meals from
            config: Search parameters (STANDARD defaults if omitted)
            bands: Achievement band per tracked nutrient
            nutrient_weights: Objective weight per nutrient
            profile: User preferences for the preference objective
            macro_split: Ideal macro split for the balance objective
            evaluator: Custom evaluator; built from the arguments above if omitted
            json_logger: Optional per-generation JSON lines logger
        """
        self.catalog = list(catalog)
        self.config = config or NSGAIIConfig()
        self.bands = dict(DEFAULT_ACHIEVEMENT_BANDS if bands is None else bands)
        self.nutrient_weights = dict(DEFAULT_NUTRIENT_WEIGHTS)
        if nutrient_weights:
            self.nutrient_weights.update(nutrient_weights)
        self.evaluator = evaluator or MultiObjectiveEvaluator.create(
            bands=self.bands,
            nutrient_weights=self.nutrient_weights,
            profile=profile,
            macro_split=macro_split,
            good_enough_threshold=self.config.good_enough_threshold,
        )
        self.json_logger = json_logger

        logger.info(
            f"NSGAIIMealPlanner initialized: foods={len(self.catalog)}, "
            f"pop={self.config.population_size}, gens={self.config.max_generations}, "
            f"crossover={self.config.crossover_rate}, mutation={self.config.mutation_rate}, "
            f"selection={self.config.selection_type.value}, "
            f"mutation_type={self.config.mutation_type.value}"
        )

    def generate_meal(
        self, target: NutrientVector, require_staple: bool = True
    ) -> ParetoResult:
        """Run the generational loop and extract the final front.

        Raises:
            EmptyCatalogError: If the catalog cannot produce a valid meal
        """
        check_catalog(self.catalog, require_staple)
        rng = random.Random(self.config.seed)
        context = MutationContext(
            catalog=self.catalog,
            target=target,
            bands=self.bands,
            require_staple=require_staple,
            min_foods=self.config.min_foods_per_meal,
            max_foods=self.config.max_foods_per_meal,
            strength=self.config.intake_mutation_strength,
            nutrient_weights=self.nutrient_weights,
        )

        logger.info(
            f"Starting meal search: target calories={target.calories:.0f}, "
            f"carbs={target.carbs:.0f}g, protein={target.protein:.0f}g, "
            f"fat={target.fat:.0f}g, require_staple={require_staple}"
        )

        population = initialize_population(self.catalog, self.config, require_staple, rng)
        self._evaluate(population.solutions, target)
        population.rank()
        self._log_generation(population)

        generations_run = 0
        terminated_early = False
        best_score = self._best_front_score(population)
        stalled = 0

        for generation in range(1, self.config.max_generations + 1):
            offspring = self._make_offspring(population, context, require_staple, rng)
            self._evaluate(offspring.solutions, target)

            merged = Population.merge(population, offspring)
            merged.rank()
            population = merged.truncate(self.config.population_size)
            generations_run = generation
            self._log_generation(population)

            if self._is_converged(population):
                terminated_early = generation < self.config.max_generations
                logger.info(
                    f"Early termination at generation {generation}: "
                    f"front 1 has {len(population.front(1))} good-enough solutions"
                )
                break

            if self.config.no_improvement_limit is not None:
                score = self._best_front_score(population)
                if score > best_score:
                    best_score = score
                    stalled = 0
                else:
                    stalled += 1
                if stalled >= self.config.no_improvement_limit:
                    terminated_early = generation < self.config.max_generations
                    logger.info(
                        f"Stopping at generation {generation}: no improvement "
                        f"for {stalled} generations"
                    )
                    break

        result = self.extract_result(population, target)
        result.generations_run = generations_run
        result.terminated_early = terminated_early
        self._log_result(result)
        return result

    def _evaluate(self, solutions: Sequence[Solution], target: NutrientVector) -> None:
        self.evaluator.evaluate_all(
            solutions, target, parallel=self.config.parallel_evaluation
        )

    def _make_offspring(
        self,
        population: Population,
        context: MutationContext,
        require_staple: bool,
        rng: random.Random,
    ) -> Population:
        """Select, recombine, mutate and validate until the offspring is full."""
        config = self.config
        parents = population.solutions
        children: List[Solution] = []
        while len(children) < config.population_size:
            parent1 = select_parent(parents, config.selection_type, config.tournament_size, rng)
            parent2 = select_parent(parents, config.selection_type, config.tournament_size, rng)
            for child in crossover(parent1, parent2, config.crossover_rate, require_staple, rng):
                child, _ = maybe_mutate(
                    child, config.mutation_rate, config.mutation_type, context, rng
                )
                children.append(
                    ensure_valid(child, self.catalog, config, require_staple, rng)
                )
        return Population(children[: config.population_size], generation=population.generation)

    def _is_converged(self, population: Population) -> bool:
        front = population.front(1)
        if len(front) < self.config.min_pareto_solutions:
            return False
        return all(self.evaluator.is_good_enough(solution) for solution in front)

    def _best_front_score(self, population: Population) -> float:
        front = population.front(1)
        return max((self.evaluator.overall_score(s) for s in front), default=0.0)

    def extract_result(self, population: Population, target: NutrientVector) -> ParetoResult:
        """Front-1 solutions fully in band, else the closest ones.

        Fallback order: calories in band first, then lowest weighted deviation,
        then highest aggregate score.
        """
        front = population.front(1)
        verified = [s for s in front if all_in_band(s.totals, target, self.bands)]
        if verified:
            verified.sort(key=lambda s: -self.evaluator.overall_score(s))
            logger.info(f"{len(verified)} of {len(front)} front-1 solutions meet every band")
            return ParetoResult(ResultKind.VERIFIED, verified, target, self.bands)

        ranked = sorted(
            front,
            key=lambda s: (
                not nutrient_in_band(s.totals, target, self.bands, PRIMARY_NUTRIENT),
                weighted_deviation(s.totals, target, self.bands),
                -self.evaluator.overall_score(s),
            ),
        )
        logger.warning(
            f"No front-1 solution meets every band; returning the "
            f"{min(FALLBACK_RESULT_COUNT, len(ranked))} closest of {len(front)}"
        )
        return ParetoResult(
            ResultKind.BEST_EFFORT, ranked[:FALLBACK_RESULT_COUNT], target, self.bands
        )

    def _log_generation(self, population: Population) -> None:
        fronts = population.fronts()
        front = fronts[0] if fronts else []
        diversity = diversity_metric(front)
        best_score = self._best_front_score(population)
        logger.debug(
            f"Generation {population.generation}: fronts={len(fronts)}, "
            f"front1={len(front)}, best_score={best_score:.4f}, diversity={diversity:.4f}"
        )
        if self.json_logger is not None:
            self.json_logger.log_generation(
                generation=population.generation,
                front_sizes=[len(f) for f in fronts],
                statistics=population.objective_statistics(),
                diversity=diversity,
                best_score=best_score,
            )

    def _log_result(self, result: ParetoResult) -> None:
        best = result.best
        ratios = achievement_ratios(best.totals, result.target, list(self.bands))
        logger.info(
            f"Meal search finished after {result.generations_run} generations: "
            f"{len(result)} {result.kind.value} solution(s), best calories "
            f"{format_ratio(ratios.get('calories', float('inf')))} of target"
        )
        logger.debug(f"Best solution: {format_meal({g.name: g.intake for g in best.genes})}")
        logger.debug(f"Best solution ratios: {format_ratios(ratios)}")
