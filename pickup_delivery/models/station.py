"""Station model representing vertices of the rail network."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Station:
    """
    A named stop in the transportation network.

    Stations compare and hash by name, so they can be used both as
    graph nodes and as sort keys for reproducible iteration.
    """
    name: str

    def __str__(self) -> str:
        return self.name
