"""Table-driven adjacency between hexes, corners and edges.

Corners are encoded as ``N``/``S`` of a home hex and edges as ``E``/``SE``/``SW``.
On an unbounded pointy-top grid each physical corner and edge has exactly one
such encoding; :func:`canonical_corner` and :func:`canonical_edge` convert the
other hex-relative names (``NE``, ``NW``, ``W`` ...) into it.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from .hexgrid import Direction, cube_neighbor
from .types import (
    CornerCoord,
    CornerDirection,
    EdgeCoord,
    EdgeDirection,
    Hex,
    Structure,
    StructureCoord,
)

N, S = CornerDirection.N, CornerDirection.S
E, SE, SW = EdgeDirection.E, EdgeDirection.SE, EdgeDirection.SW

# hex-relative name -> (dq, dr, canonical direction)
_CORNER_ALIASES: Dict[str, Tuple[int, int, CornerDirection]] = {
    "N": (0, 0, N),
    "NE": (1, -1, S),
    "SE": (0, 1, N),
    "S": (0, 0, S),
    "SW": (-1, 1, N),
    "NW": (0, -1, S),
}

_EDGE_ALIASES: Dict[str, Tuple[int, int, EdgeDirection]] = {
    "NE": (1, -1, SW),
    "E": (0, 0, E),
    "SE": (0, 0, SE),
    "SW": (0, 0, SW),
    "W": (-1, 0, E),
    "NW": (0, -1, SE),
}

HEX_CORNER_NAMES = ("N", "NE", "SE", "S", "SW", "NW")
HEX_EDGE_NAMES = ("NE", "E", "SE", "SW", "W", "NW")

_EDGES_OF_EDGE: Dict[EdgeDirection, Tuple[Tuple[int, int, EdgeDirection], ...]] = {
    E: ((0, 0, SE), (1, 0, SW), (1, -1, SE), (1, -1, SW)),
    SE: ((0, 0, E), (1, 0, SW), (-1, 1, E), (0, 0, SW)),
    SW: ((0, 0, SE), (-1, 1, E), (-1, 0, E), (-1, 0, SE)),
}

_CORNERS_OF_EDGE: Dict[EdgeDirection, Tuple[Tuple[int, int, CornerDirection], ...]] = {
    E: ((1, -1, S), (0, 1, N)),
    SE: ((0, 1, N), (0, 0, S)),
    SW: ((0, 0, S), (-1, 1, N)),
}

_EDGES_OF_CORNER: Dict[CornerDirection, Tuple[Tuple[int, int, EdgeDirection], ...]] = {
    N: ((0, -1, E), (1, -1, SW), (0, -1, SE)),
    S: ((0, 0, SE), (-1, 1, E), (0, 0, SW)),
}

_CORNERS_OF_CORNER: Dict[CornerDirection, Tuple[Tuple[int, int, CornerDirection], ...]] = {
    N: ((1, -2, S), (1, -1, S), (0, -1, S)),
    S: ((0, 1, N), (-1, 2, N), (-1, 1, N)),
}


def is_corner_direction(direction: str) -> bool:
    return str(getattr(direction, "value", direction)) in (N.value, S.value)


def is_edge_direction(direction: str) -> bool:
    return str(getattr(direction, "value", direction)) in (E.value, SE.value, SW.value)


def canonical_corner(q: int, r: int, direction: str) -> CornerCoord:
    key = str(getattr(direction, "value", direction)).upper()
    if key not in _CORNER_ALIASES:
        raise ValueError(f"Unknown corner direction: {direction!r}")
    dq, dr, canonical = _CORNER_ALIASES[key]
    return CornerCoord(q + dq, r + dr, canonical)


def canonical_edge(q: int, r: int, direction: str) -> EdgeCoord:
    key = str(getattr(direction, "value", direction)).upper()
    if key not in _EDGE_ALIASES:
        raise ValueError(f"Unknown edge direction: {direction!r}")
    dq, dr, canonical = _EDGE_ALIASES[key]
    return EdgeCoord(q + dq, r + dr, canonical)


def corners_of_hex(hex_: Hex) -> List[CornerCoord]:
    return [canonical_corner(hex_.q, hex_.r, name) for name in HEX_CORNER_NAMES]


def edges_of_hex(hex_: Hex) -> List[EdgeCoord]:
    return [canonical_edge(hex_.q, hex_.r, name) for name in HEX_EDGE_NAMES]


def hexes_adjacent_to_structure(
    structure: Structure | StructureCoord,
) -> List[Optional[Hex]]:
    """Hexes touching a structure, always three slots.

    Corners fill all three slots with the home hex first. Edges touch only two
    hexes, so the first slot is ``None``.
    """
    coords = structure.coords if isinstance(structure, Structure) else structure
    home = Hex(coords.q, coords.r)
    direction = coords.direction
    if direction == N:
        return [home, cube_neighbor(home, Direction.NORTHEAST), cube_neighbor(home, Direction.NORTHWEST)]
    if direction == S:
        return [home, cube_neighbor(home, Direction.SOUTHEAST), cube_neighbor(home, Direction.SOUTHWEST)]
    if direction == E:
        return [None, home, cube_neighbor(home, Direction.EAST)]
    if direction == SE:
        return [None, home, cube_neighbor(home, Direction.SOUTHEAST)]
    if direction == SW:
        return [None, cube_neighbor(home, Direction.SOUTHWEST), home]
    return [None, None, None]


def _shift(coords: StructureCoord, table, factory: Callable) -> list:
    return [factory(coords.q + dq, coords.r + dr, d) for dq, dr, d in table[coords.direction]]


def edges_adjacent_to_edge(coords: EdgeCoord) -> List[EdgeCoord]:
    """The four edges sharing an endpoint with ``coords``, clockwise."""
    return _shift(coords, _EDGES_OF_EDGE, EdgeCoord)


def corners_adjacent_to_edge(coords: EdgeCoord) -> List[CornerCoord]:
    return _shift(coords, _CORNERS_OF_EDGE, CornerCoord)


def edges_adjacent_to_corner(coords: CornerCoord) -> List[EdgeCoord]:
    return _shift(coords, _EDGES_OF_CORNER, EdgeCoord)


def corners_adjacent_to_corner(coords: CornerCoord) -> List[CornerCoord]:
    """Corners one edge away, used by the settlement distance rule."""
    return _shift(coords, _CORNERS_OF_CORNER, CornerCoord)
