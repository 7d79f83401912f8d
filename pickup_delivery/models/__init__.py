"""Data models for the pickup-and-delivery planner."""

from .station import Station
from .edge import Edge
from .order import Order
from .train import Train
from .plan import Move, Plan
from .network import Network, DistanceMatrix
from .instance import ProblemInstance

__all__ = [
    "Station",
    "Edge",
    "Order",
    "Train",
    "Move",
    "Plan",
    "Network",
    "DistanceMatrix",
    "ProblemInstance",
]
