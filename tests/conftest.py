from pathlib import Path

import pytest

from pickup_delivery.models import Edge, Network, Order, ProblemInstance, Station, Train
from pickup_delivery.utils import load_input

DATA_DIR = Path(__file__).parent.parent / "data"

A, B, C = Station("A"), Station("B"), Station("C")


@pytest.fixture
def simple_instance() -> ProblemInstance:
    """A --30-- B --10-- C, one order A->C and one train at B."""
    return ProblemInstance(
        stations=[A, B, C],
        edges=[Edge("E1", A, B, 30), Edge("E2", B, C, 10)],
        orders=[Order("K1", 5, A, C)],
        trains=[Train("Q1", 6, B)],
    )


@pytest.fixture
def simple_network(simple_instance) -> Network:
    return Network.build(simple_instance.stations, simple_instance.edges)


@pytest.fixture
def multiload_instance() -> ProblemInstance:
    return load_input(DATA_DIR / "multiload.txt")


@pytest.fixture
def multiload_network(multiload_instance) -> Network:
    return Network.build(multiload_instance.stations, multiload_instance.edges)
