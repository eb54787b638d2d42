"""Genetic operators: selection and crossover.

All operators take an explicit random.Random so a seeded run is
reproducible. Mutation lives in mutation.py.
"""

import math
import random
from typing import List, Optional, Sequence, Tuple

from .config import SelectionType
from .crowding import crowded_sort_key
from .types import Gene, Solution


def tournament_selection(
    population: Sequence[Solution],
    tournament_size: int,
    rng: random.Random,
) -> Solution:
    """Select a solution using tournament selection.

    Samples tournament_size solutions uniformly (with replacement) and keeps
    the lowest rank, breaking ties by larger crowding distance.
    """
    best: Optional[Solution] = None
    for _ in range(tournament_size):
        candidate = population[rng.randrange(len(population))]
        if best is None or crowded_sort_key(candidate) < crowded_sort_key(best):
            best = candidate
    return best


def roulette_selection(population: Sequence[Solution], rng: random.Random) -> Solution:
    """Fitness-proportional selection with fitness 1/(rank+1) * (crowding+1).

    Infinite crowding distances are capped just above the largest finite one.
    """
    finite = [
        s.crowding_distance for s in population if not math.isinf(s.crowding_distance)
    ]
    cap = (max(finite) if finite else 0.0) + 1.0
    fitness = []
    for solution in population:
        crowding = cap if math.isinf(solution.crowding_distance) else solution.crowding_distance
        fitness.append((1.0 / (solution.rank + 1)) * (crowding + 1.0))
    return rng.choices(list(population), weights=fitness, k=1)[0]


def rank_selection(population: Sequence[Solution], rng: random.Random) -> Solution:
    """Uniform pick among the better half by rank, then crowding distance."""
    ordered = sorted(population, key=crowded_sort_key)
    elite = ordered[: max(1, len(ordered) // 2)]
    return rng.choice(elite)


def select_parent(
    population: Sequence[Solution],
    selection_type: SelectionType,
    tournament_size: int,
    rng: random.Random,
) -> Solution:
    if selection_type == SelectionType.ROULETTE:
        return roulette_selection(population, rng)
    if selection_type == SelectionType.RANK:
        return rank_selection(population, rng)
    return tournament_selection(population, tournament_size, rng)


def _split_staples(solution: Solution, require_staple: bool) -> Tuple[List[Gene], List[Gene]]:
    if not require_staple:
        return [], list(solution.genes)
    staples = [gene for gene in solution.genes if gene.is_staple]
    others = [gene for gene in solution.genes if not gene.is_staple]
    return staples, others


def _unique_genes(genes: Sequence[Gene]) -> List[Gene]:
    """Drop genes whose food already appeared earlier."""
    seen = set()
    unique = []
    for gene in genes:
        if gene.name not in seen:
            seen.add(gene.name)
            unique.append(gene)
    return unique


def crossover(
    parent1: Solution,
    parent2: Solution,
    crossover_rate: float,
    require_staple: bool,
    rng: random.Random,
) -> Tuple[Solution, Solution]:
    """Staple-preserving single-point crossover.

    With probability 1 - crossover_rate the parents are cloned. Otherwise
    each child receives exactly one staple (a coin flip when both parents
    have one) and the non-staple genes are recombined at a cut point drawn
    independently for each parent. Duplicate foods keep their first
    occurrence.

    Returns:
        Tuple of two child solutions
    """
    if rng.random() >= crossover_rate:
        return Solution(parent1.genes), Solution(parent2.genes)

    staples1, others1 = _split_staples(parent1, require_staple)
    staples2, others2 = _split_staples(parent2, require_staple)

    staple1: Optional[Gene] = None
    staple2: Optional[Gene] = None
    if staples1 and staples2:
        if rng.random() < 0.5:
            staple1, staple2 = staples1[0], staples2[0]
        else:
            staple1, staple2 = staples2[0], staples1[0]
    elif staples1 or staples2:
        staple1 = staple2 = (staples1 or staples2)[0]

    point1 = rng.randint(0, len(others1))
    point2 = rng.randint(0, len(others2))
    tail1 = others1[:point1] + others2[point2:]
    tail2 = others2[:point2] + others1[point1:]

    genes1 = ([staple1] if staple1 else []) + tail1
    genes2 = ([staple2] if staple2 else []) + tail2
    return Solution(_unique_genes(genes1)), Solution(_unique_genes(genes2))
