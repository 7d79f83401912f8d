"""Utility functions for the pickup-and-delivery planner."""

from .data_loader import (
    load_input,
    parse_input,
    format_input,
    save_text,
)
from .validators import (
    PlanValidator,
    ValidationResult,
)
from .generator import generate_instance

__all__ = [
    "load_input",
    "parse_input",
    "format_input",
    "save_text",
    "PlanValidator",
    "ValidationResult",
    "generate_instance",
]
