"""NSGA-II meal search modules."""

from .config import (
    NSGAIIConfig,
    MutationType,
    SelectionType,
    SMALL_CONFIG,
    STANDARD_CONFIG,
    LARGE_CONFIG,
)
from .types import Gene, ObjectiveScore, Solution
from .population import Population
from .evaluator import MultiObjectiveEvaluator
from .initialization import EmptyCatalogError
from .planner import NSGAIIMealPlanner, ParetoResult, ResultKind

__all__ = [
    "NSGAIIConfig",
    "MutationType",
    "SelectionType",
    "SMALL_CONFIG",
    "STANDARD_CONFIG",
    "LARGE_CONFIG",
    "Gene",
    "ObjectiveScore",
    "Solution",
    "Population",
    "MultiObjectiveEvaluator",
    "EmptyCatalogError",
    "NSGAIIMealPlanner",
    "ParetoResult",
    "ResultKind",
]
