"""Crowding distance within Pareto fronts."""

import math
from typing import List, Sequence

from .types import Solution

INFINITY = float("inf")


def assign_crowding_distance(front: Sequence[Solution]) -> None:
    """Set crowding_distance on every member of one front.

    Fronts of two or fewer members are all boundary points and get +inf.
    """
    if not front:
        return
    if len(front) <= 2:
        for solution in front:
            solution.crowding_distance = INFINITY
        return

    for solution in front:
        solution.crowding_distance = 0.0

    objective_count = len(front[0].objectives)
    for m in range(objective_count):
        ordered = sorted(front, key=lambda s: s.objectives[m].value)
        low = ordered[0].objectives[m].value
        high = ordered[-1].objectives[m].value
        ordered[0].crowding_distance = INFINITY
        ordered[-1].crowding_distance = INFINITY
        if high == low:
            continue
        span = high - low
        for k in range(1, len(ordered) - 1):
            if ordered[k].crowding_distance == INFINITY:
                continue
            gap = ordered[k + 1].objectives[m].value - ordered[k - 1].objectives[m].value
            ordered[k].crowding_distance += gap / span


def assign_crowding_distances(fronts: Sequence[Sequence[Solution]]) -> None:
    for front in fronts:
        assign_crowding_distance(front)


def crowded_sort_key(solution: Solution):
    """Sort key preferring lower rank, then larger crowding distance."""
    return (solution.rank, -solution.crowding_distance)


def diversity_metric(front: Sequence[Solution]) -> float:
    """Standard deviation of the finite crowding distances of a front."""
    distances: List[float] = [
        s.crowding_distance for s in front if not math.isinf(s.crowding_distance)
    ]
    if len(distances) < 2:
        return 0.0
    mean = sum(distances) / len(distances)
    variance = sum((d - mean) ** 2 for d in distances) / len(distances)
    return math.sqrt(variance)
