"""Logging setup and per-generation JSON logging."""

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional


def configure_logging(level: str = "INFO", log_file: Optional[str] = "mealplanner.log") -> None:
    """
    Configure console and rotating file logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file, or None for console only
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


class JSONLogger:
    """Writes one JSON line per generation for later analysis."""

    def __init__(self, log_file: str = "generations.jsonl"):
        """
        Initialize JSON logger.

        Args:
            log_file: Path to JSON lines file (appended to)
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.file_handle = open(self.log_file, "a")

    def log_generation(
        self,
        generation: int,
        front_sizes: List[int],
        statistics: Dict[str, Dict[str, float]],
        diversity: float,
        best_score: float,
    ) -> None:
        """
        Log one generation.

        Args:
            generation: Generation number (0 for the initial population)
            front_sizes: Size of every front, best first
            statistics: Per-objective min/max/avg
            diversity: Crowding-distance spread of front 1
            best_score: Best aggregate score in front 1
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "generation": generation,
            "front_sizes": front_sizes,
            "objectives": statistics,
            "diversity": diversity,
            "best_score": best_score,
        }
        json.dump(entry, self.file_handle)
        self.file_handle.write("\n")
        self.file_handle.flush()

    def close(self) -> None:
        """Close log file."""
        self.file_handle.close()

    def __enter__(self) -> "JSONLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
