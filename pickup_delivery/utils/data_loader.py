"""Problem instance parsing and serialisation."""

import logging
from pathlib import Path
from typing import Callable, Iterator, List, Set, Tuple, TypeVar

from pickup_delivery.exceptions import InputFormatError
from pickup_delivery.models import Edge, Order, ProblemInstance, Station, Train

logger = logging.getLogger("pdp.utils")

T = TypeVar("T")


class _Lines:
    """Line cursor that remembers 1-based line numbers."""

    def __init__(self, text: str):
        self._lines = text.splitlines()
        self._index = 0

    @property
    def line_number(self) -> int:
        return self._index

    def skip_blank(self) -> None:
        while self._index < len(self._lines) and not self._lines[self._index].strip():
            self._index += 1

    def next(self, what: str) -> str:
        if self._index >= len(self._lines):
            raise InputFormatError(f"unexpected end of input, expected {what}", self._index + 1)
        line = self._lines[self._index].strip()
        self._index += 1
        return line


def _parse_int(value: str, what: str, line: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise InputFormatError(f"{what} must be an integer, got {value.strip()!r}", line) from None


def _fields(line: str, count: int, what: str, line_number: int) -> List[str]:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) != count or not all(parts):
        raise InputFormatError(f"expected {count} comma-separated fields for {what}, got {line!r}", line_number)
    return parts


def _section(
    lines: _Lines,
    what: str,
    minimum: int,
    parse: Callable[[str, int], T]
) -> List[T]:
    lines.skip_blank()
    count = _parse_int(lines.next(f"number of {what}"), f"number of {what}", lines.line_number)
    if count < minimum:
        raise InputFormatError(f"expected at least {minimum} {what}, got {count}", lines.line_number)

    items = []
    for _ in range(count):
        line = lines.next(what)
        items.append(parse(line, lines.line_number))
    return items


def _check_unique(names: List[Tuple[str, int]], what: str) -> None:
    seen: Set[str] = set()
    for name, line in names:
        if name in seen:
            raise InputFormatError(f"duplicate {what} name {name!r}", line)
        seen.add(name)


def parse_input(text: str) -> ProblemInstance:
    """
    Parse a problem instance.

    The text has four sections, each a count line followed by that
    many entries: station names, ``name,from,to,distance`` edges,
    ``name,weight,from,to`` orders and ``name,capacity,location``
    trains. Blank lines between sections are ignored.

    Args:
        text: Instance text

    Returns:
        Parsed ProblemInstance

    Raises:
        InputFormatError: If the text is malformed or inconsistent
    """
    lines = _Lines(text)

    station_lines = _section(lines, "stations", 2, lambda line, n: (line, n))
    _check_unique(station_lines, "station")
    stations = [Station(name) for name, _ in station_lines]
    known = set(stations)

    def station(name: str, line: int) -> Station:
        result = Station(name)
        if result not in known:
            raise InputFormatError(f"unknown station {name!r}", line)
        return result

    def parse_edge(line: str, n: int) -> Tuple[Edge, int]:
        name, source, target, distance = _fields(line, 4, "edge", n)
        distance = _parse_int(distance, "edge distance", n)
        if distance < 0:
            raise InputFormatError(f"edge {name} has negative distance {distance}", n)
        return Edge(name, station(source, n), station(target, n), distance), n

    def parse_order(line: str, n: int) -> Tuple[Order, int]:
        name, weight, origin, destination = _fields(line, 4, "order", n)
        weight = _parse_int(weight, "order weight", n)
        if weight <= 0:
            raise InputFormatError(f"order {name} must have a positive weight, got {weight}", n)
        return Order(name, weight, station(origin, n), station(destination, n)), n

    def parse_train(line: str, n: int) -> Tuple[Train, int]:
        name, capacity, location = _fields(line, 3, "train", n)
        capacity = _parse_int(capacity, "train capacity", n)
        if capacity <= 0:
            raise InputFormatError(f"train {name} must have a positive capacity, got {capacity}", n)
        return Train(name, capacity, station(location, n)), n

    edges = _section(lines, "edges", 1, parse_edge)
    orders = _section(lines, "orders", 0, parse_order)
    trains = _section(lines, "trains", 1, parse_train)

    _check_unique([(e.name, n) for e, n in edges], "edge")
    _check_unique([(o.name, n) for o, n in orders], "order")
    _check_unique([(t.name, n) for t, n in trains], "train")

    instance = ProblemInstance(
        stations=stations,
        edges=[e for e, _ in edges],
        orders=[o for o, _ in orders],
        trains=[t for t, _ in trains]
    )

    logger.debug(
        f"Parsed {len(instance.stations)} stations, {len(instance.edges)} edges, "
        f"{len(instance.orders)} orders, {len(instance.trains)} trains"
    )
    return instance


def load_input(filepath: str | Path) -> ProblemInstance:
    """
    Load a problem instance from a file.

    Raises:
        FileNotFoundError: If file doesn't exist
        InputFormatError: If the file is malformed
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return parse_input(f.read())


def _format_section(entries: List[str]) -> Iterator[str]:
    yield str(len(entries))
    yield from entries
    yield ""


def format_input(instance: ProblemInstance) -> str:
    """Render an instance in the format accepted by ``parse_input``."""
    sections = [
        [s.name for s in instance.stations],
        [f"{e.name},{e.from_station},{e.to_station},{e.distance}" for e in instance.edges],
        [f"{o.name},{o.weight},{o.origin},{o.destination}" for o in instance.orders],
        [f"{t.name},{t.capacity},{t.location}" for t in instance.trains],
    ]
    lines = [line for entries in sections for line in _format_section(entries)]
    return "\n".join(lines)


def save_text(text: str, filepath: str | Path) -> None:
    """
    Save text to a file, creating parent directories.

    Args:
        text: Content to write
        filepath: Path to save to
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(text)

    logger.debug(f"Saved data to {filepath}")
