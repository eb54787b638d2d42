"""Population of Solutions for one generation."""

from typing import Dict, Iterable, List, Optional

from .crowding import assign_crowding_distances, crowded_sort_key
from .sorting import non_dominated_sort
from .types import Solution


class Population:
    """One generation's Solutions with derived front and objective views.

    The front and per-objective groupings are caches rebuilt by rank()
    and sorted_by_objective(); they are not kept in sync with later edits
    of the solutions list.
    """

    def __init__(self, solutions: Optional[Iterable[Solution]] = None, generation: int = 0):
        self.solutions: List[Solution] = list(solutions or [])
        self.generation = generation
        self._fronts: Optional[List[List[Solution]]] = None
        self._by_objective: Dict[str, List[Solution]] = {}

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self):
        return iter(self.solutions)

    def __getitem__(self, index: int) -> Solution:
        return self.solutions[index]

    def add(self, solution: Solution) -> None:
        self.solutions.append(solution)
        self._fronts = None
        self._by_objective.clear()

    @classmethod
    def merge(cls, first: "Population", second: "Population") -> "Population":
        """Union of two populations, keeping the first one's generation."""
        return cls(first.solutions + second.solutions, generation=first.generation)

    def rank(self) -> List[List[Solution]]:
        """Non-dominated sort plus crowding distance on every front."""
        self._fronts = non_dominated_sort(self.solutions)
        assign_crowding_distances(self._fronts)
        self._by_objective.clear()
        return self._fronts

    def fronts(self) -> List[List[Solution]]:
        if self._fronts is None:
            grouped: Dict[int, List[Solution]] = {}
            for solution in self.solutions:
                if solution.rank > 0:
                    grouped.setdefault(solution.rank, []).append(solution)
            self._fronts = [grouped[r] for r in sorted(grouped)]
        return self._fronts

    def front(self, rank: int) -> List[Solution]:
        """Members of the given 1-based front, or an empty list."""
        fronts = self.fronts()
        if 1 <= rank <= len(fronts):
            return list(fronts[rank - 1])
        return []

    @property
    def max_rank(self) -> int:
        return max((s.rank for s in self.solutions), default=0)

    def sorted_by_objective(self, name: str) -> List[Solution]:
        """Solutions ordered by one objective's value, ascending."""
        if name not in self._by_objective:
            self._by_objective[name] = sorted(
                (s for s in self.solutions if s.score(name) is not None),
                key=lambda s: s.score(name).value,
            )
        return self._by_objective[name]

    def best(self, count: int) -> List[Solution]:
        """The first count solutions by rank, then crowding distance."""
        return sorted(self.solutions, key=crowded_sort_key)[:count]

    def truncate(self, size: int) -> "Population":
        """Elitist selection of the next generation.

        Fills whole fronts in rank order, then the overflow front by
        descending crowding distance. Expects rank() to have been called.
        """
        survivors: List[Solution] = []
        for front in self.fronts():
            if len(survivors) + len(front) <= size:
                survivors.extend(front)
                continue
            remaining = size - len(survivors)
            by_crowding = sorted(front, key=lambda s: -s.crowding_distance)
            survivors.extend(by_crowding[:remaining])
            break
        return Population(survivors, generation=self.generation + 1)

    def objective_statistics(self) -> Dict[str, Dict[str, float]]:
        """Min, max and average of every objective across the population."""
        stats: Dict[str, Dict[str, float]] = {}
        if not self.solutions or not self.solutions[0].objectives:
            return stats
        for index, score in enumerate(self.solutions[0].objectives):
            values = [s.objectives[index].value for s in self.solutions if s.objectives]
            stats[score.name] = {
                "min": min(values),
                "max": max(values),
                "avg": sum(values) / len(values),
            }
        return stats
