"""Configuration for the NSGA-II meal search.

Presets:
- SMALL: pop=20, gens=30 - quick runs and tests
- STANDARD: pop=50, gens=100 - default
- LARGE: pop=100, gens=200 - thorough search, parallel evaluation
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import Config, GOOD_ENOUGH_THRESHOLD


class SelectionType(str, Enum):
    TOURNAMENT = "tournament"
    ROULETTE = "roulette"
    RANK = "rank"


class MutationType(str, Enum):
    INTAKE_ADJUSTMENT = "intake_adjustment"
    FOOD_REPLACEMENT = "food_replacement"
    FOOD_ADDITION = "food_addition"
    FOOD_REMOVAL = "food_removal"
    CALORIE_OPTIMIZATION = "calorie_optimization"
    NUTRIENT_SENSITIVITY = "nutrient_sensitivity"
    COMPREHENSIVE = "comprehensive"


@dataclass
class NSGAIIConfig:
    """Configuration for the NSGA-II meal planner.

    Validated on construction; an invalid value raises ValueError.

    min_foods_per_meal and max_foods_per_meal bound random initialization and
    the food addition/removal mutations only. Crossover children may hold more
    or fewer foods and are still valid, so final meals can fall outside them.
    """
    population_size: int = 50
    max_generations: int = 100
    crossover_rate: float = 0.9
    mutation_rate: float = 0.2
    min_foods_per_meal: int = 4
    max_foods_per_meal: int = 8
    tournament_size: int = 2
    min_pareto_solutions: int = 10
    seed: Optional[int] = None
    parallel_evaluation: bool = False

    selection_type: SelectionType = SelectionType.TOURNAMENT
    mutation_type: MutationType = MutationType.COMPREHENSIVE
    intake_mutation_strength: float = 0.2
    good_enough_threshold: float = GOOD_ENOUGH_THRESHOLD

    # Stop after this many generations without a better front-1 score (None disables)
    no_improvement_limit: Optional[int] = None

    def __post_init__(self):
        self.selection_type = SelectionType(self.selection_type)
        self.mutation_type = MutationType(self.mutation_type)
        self.validate()

    def validate(self) -> None:
        for name in ("population_size", "max_generations", "tournament_size",
                     "min_pareto_solutions", "min_foods_per_meal"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("crossover_rate", "mutation_rate", "intake_mutation_strength",
                     "good_enough_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.min_foods_per_meal > self.max_foods_per_meal:
            raise ValueError(
                f"min_foods_per_meal ({self.min_foods_per_meal}) exceeds "
                f"max_foods_per_meal ({self.max_foods_per_meal})"
            )
        if self.tournament_size > self.population_size:
            raise ValueError(
                f"tournament_size ({self.tournament_size}) exceeds "
                f"population_size ({self.population_size})"
            )
        if self.no_improvement_limit is not None and self.no_improvement_limit <= 0:
            raise ValueError("no_improvement_limit must be positive when set")

    @classmethod
    def from_settings(cls, settings: Optional[Config] = None, **overrides) -> "NSGAIIConfig":
        """Build a configuration from environment-backed settings."""
        settings = settings or Config()
        values = dict(
            population_size=settings.POPULATION_SIZE,
            max_generations=settings.MAX_GENERATIONS,
            crossover_rate=settings.CROSSOVER_RATE,
            mutation_rate=settings.MUTATION_RATE,
            min_foods_per_meal=settings.MIN_FOODS_PER_MEAL,
            max_foods_per_meal=settings.MAX_FOODS_PER_MEAL,
            tournament_size=settings.TOURNAMENT_SIZE,
            min_pareto_solutions=settings.MIN_PARETO_SOLUTIONS,
            seed=settings.RANDOM_SEED,
            parallel_evaluation=settings.PARALLEL_EVALUATION,
        )
        values.update(overrides)
        return cls(**values)


SMALL_CONFIG = NSGAIIConfig(
    population_size=20,
    max_generations=30,
    crossover_rate=0.9,
    mutation_rate=0.3,
    min_pareto_solutions=5,
)

STANDARD_CONFIG = NSGAIIConfig()

LARGE_CONFIG = NSGAIIConfig(
    population_size=100,
    max_generations=200,
    crossover_rate=0.9,
    mutation_rate=0.3,
    min_pareto_solutions=20,
    parallel_evaluation=True,
)
