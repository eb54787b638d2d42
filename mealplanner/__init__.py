"""Multi-objective (NSGA-II) meal composition search."""

__version__ = "0.1.0"
