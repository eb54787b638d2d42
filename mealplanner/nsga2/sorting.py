"""Fast non-dominated sorting."""

from typing import List, Sequence

from .types import Solution


def dominates(a: Solution, b: Solution) -> bool:
    """True if a dominates b."""
    return a.dominates(b)


def non_dominated_sort(solutions: Sequence[Solution]) -> List[List[Solution]]:
    """Rank solutions into Pareto fronts.

    Ranks are reset first, so the function can be called again on a merged
    parent+offspring population. Sets solution.rank to the 1-based front
    index and returns the fronts in rank order. O(N^2 * M).
    """
    for solution in solutions:
        solution.rank = 0

    size = len(solutions)
    dominated_by: List[List[int]] = [[] for _ in range(size)]
    domination_count = [0] * size

    for i in range(size):
        for j in range(i + 1, size):
            if solutions[i].dominates(solutions[j]):
                dominated_by[i].append(j)
                domination_count[j] += 1
            elif solutions[j].dominates(solutions[i]):
                dominated_by[j].append(i)
                domination_count[i] += 1

    fronts: List[List[Solution]] = []
    current = [i for i in range(size) if domination_count[i] == 0]
    rank = 1
    while current:
        for i in current:
            solutions[i].rank = rank
        fronts.append([solutions[i] for i in current])

        next_front = []
        for i in current:
            for j in dominated_by[i]:
                domination_count[j] -= 1
                if domination_count[j] == 0:
                    next_front.append(j)
        current = sorted(next_front)
        rank += 1

    return fronts
