"""Configuration module for the pickup-and-delivery planner."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the application logger."""
    logger = logging.getLogger("pdp")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


@dataclass
class SolverParams:
    """Parameters for the algorithm x sorter search."""
    random_samples: int = 100  # Runs per unstable (random) sorter
    max_workers: int = 1  # 1 runs everything in the calling thread
    seed: Optional[int] = None
    max_route_stops: int = 8  # 8! = 40320 permutations per batch
    show_progress: bool = True

    def __post_init__(self):
        if self.random_samples < 1:
            raise ValueError(f"random_samples must be positive, got {self.random_samples}")
        if self.max_route_stops < 1:
            raise ValueError(f"max_route_stops must be positive, got {self.max_route_stops}")


@dataclass
class Config:
    """Configuration class for a planning run."""

    # File paths
    input_file: str
    output_file: Optional[str] = None

    # Search parameters
    solver_params: SolverParams = field(default_factory=SolverParams)

    # Logging
    log_level: int = logging.INFO

    # Base directories (computed)
    _base_dir: Path = field(init=False)
    _data_dir: Path = field(init=False)

    def __post_init__(self):
        self._base_dir = Path(__file__).parent.parent
        self._data_dir = self._base_dir / "data"

        # Bare file names fall back to the bundled instances
        input_path = Path(self.input_file)
        if not input_path.is_absolute() and not input_path.exists():
            candidate = self._data_dir / input_path
            if candidate.exists():
                self.input_file = str(candidate)

    @property
    def data_dir(self) -> Path:
        return self._data_dir


# Default configuration
def get_default_config() -> Config:
    """Return default configuration."""
    return Config(input_file="simple.txt")
