"""Cube/axial hex coordinate math for a pointy-top grid."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable, List, Tuple

import numpy as np

from .types import Hex

HEX_WIDTH = math.sqrt(3)
HEX_RADIUS = 1.0


class Direction(IntEnum):
    WEST = 0
    NORTHWEST = 1
    NORTHEAST = 2
    EAST = 3
    SOUTHEAST = 4
    SOUTHWEST = 5


# Ordered to match Direction. East is +q, as in axial_to_pixel.
CUBE_DIRECTION_VECTORS: Tuple[Hex, ...] = (
    Hex(-1, 0),
    Hex(0, -1),
    Hex(1, -1),
    Hex(1, 0),
    Hex(0, 1),
    Hex(-1, 1),
)


def cube_add(a: Hex, b: Hex) -> Hex:
    return Hex(a.q + b.q, a.r + b.r)


def cube_scale(a: Hex, factor: int) -> Hex:
    return Hex(a.q * factor, a.r * factor)


def cube_direction(direction: int) -> Hex:
    return CUBE_DIRECTION_VECTORS[direction]


def cube_neighbor(hex_: Hex, direction: int) -> Hex:
    return cube_add(hex_, cube_direction(direction))


def opposite(direction: int) -> Direction:
    return Direction((direction + 3) % 6)


def hex_distance(a: Hex, b: Hex) -> int:
    return (abs(a.q - b.q) + abs(a.r - b.r) + abs(a.s - b.s)) // 2


def ring(center: Hex, radius: int) -> List[Hex]:
    """Hexes exactly ``radius`` steps from ``center``.

    The walk starts ``radius`` steps to the southeast and follows each
    direction in table order for ``radius`` steps.
    """
    if radius == 0:
        return [Hex(center.q, center.r)]
    results: List[Hex] = []
    hex_ = cube_add(center, cube_scale(cube_direction(Direction.SOUTHEAST), radius))
    for direction in Direction:
        for _ in range(radius):
            results.append(hex_)
            hex_ = cube_neighbor(hex_, direction)
    return results


def spiral_grid(center: Hex, max_radius: int) -> List[Hex]:
    results = [Hex(center.q, center.r)]
    for k in range(1, max_radius + 1):
        results.extend(ring(center, k))
    return results


def axial_to_pixel(
    hex_: Hex, hex_width: float = HEX_WIDTH, hex_radius: float = HEX_RADIUS
) -> Tuple[float, float]:
    x = hex_radius * (hex_width * hex_.q + hex_width / 2 * hex_.r)
    z = hex_radius * (3 / 2 * hex_.r)
    return x, z


def pixel_positions(
    hexes: Iterable[Hex], hex_width: float = HEX_WIDTH, hex_radius: float = HEX_RADIUS
) -> np.ndarray:
    """Vectorised axial_to_pixel; returns an ``(n, 2)`` array of ``(x, z)``."""
    axial = np.array([(h.q, h.r) for h in hexes], dtype=float).reshape(-1, 2)
    basis = np.array([[hex_width, 0.0], [hex_width / 2, 1.5]])
    return hex_radius * axial @ basis
