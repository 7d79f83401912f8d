"""Train pickup-and-delivery planner."""

from .config import Config, SolverParams, setup_logging, get_default_config

__version__ = "0.3.0"

__all__ = [
    "Config",
    "SolverParams",
    "setup_logging",
    "get_default_config",
]
