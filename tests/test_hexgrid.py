import math

import numpy as np
import pytest

from settlers.engine.hexgrid import (
    HEX_WIDTH,
    Direction,
    axial_to_pixel,
    cube_add,
    cube_neighbor,
    cube_scale,
    hex_distance,
    opposite,
    pixel_positions,
    ring,
    spiral_grid,
)
from settlers.engine.types import Hex

CENTERS = [Hex(0, 0), Hex(3, -1), Hex(-2, 5)]


@pytest.mark.parametrize("center", CENTERS)
@pytest.mark.parametrize("radius", [0, 1, 2, 3, 5])
def test_ring_size_and_distance(center, radius):
    hexes = ring(center, radius)
    assert len(hexes) == (6 * radius if radius else 1)
    assert len(set(hexes)) == len(hexes)
    assert all(hex_distance(center, h) == radius for h in hexes)


@pytest.mark.parametrize("center", CENTERS)
@pytest.mark.parametrize("radius", [0, 1, 2, 4])
def test_spiral_covers_every_hex_once(center, radius):
    hexes = spiral_grid(center, radius)
    assert len(hexes) == 1 + 3 * radius * (radius + 1)
    assert len(set(hexes)) == len(hexes)
    assert hexes[0] == center
    distances = [hex_distance(center, h) for h in hexes]
    assert distances == sorted(distances)


def test_ring_starts_southeast():
    assert ring(Hex(0, 0), 2)[0] == cube_scale(Hex(0, 1), 2)
    assert ring(Hex(0, 0), 1) == [
        Hex(0, 1),
        Hex(-1, 1),
        Hex(-1, 0),
        Hex(0, -1),
        Hex(1, -1),
        Hex(1, 0),
    ]


@pytest.mark.parametrize("direction", list(Direction))
def test_neighbor_is_inverted_by_opposite_direction(direction):
    for h in CENTERS:
        assert cube_neighbor(cube_neighbor(h, direction), opposite(direction)) == h


def test_cube_coordinates_sum_to_zero():
    for h in spiral_grid(Hex(1, -2), 3):
        assert h.q + h.r + h.s == 0
    assert cube_add(Hex(1, 2), Hex(-3, 1)) == Hex(-2, 3)


def test_axial_to_pixel_pointy_top():
    assert axial_to_pixel(Hex(0, 0)) == (0.0, 0.0)
    x, z = axial_to_pixel(Hex(1, 0))
    assert math.isclose(x, HEX_WIDTH) and z == 0.0
    x, z = axial_to_pixel(Hex(0, 1), HEX_WIDTH, 2.0)
    assert math.isclose(x, HEX_WIDTH) and math.isclose(z, 3.0)


def test_east_neighbor_lies_to_positive_x():
    x0, _ = axial_to_pixel(Hex(0, 0))
    x1, z1 = axial_to_pixel(cube_neighbor(Hex(0, 0), Direction.EAST))
    assert x1 > x0 and z1 == 0.0
    _, z_north = axial_to_pixel(cube_neighbor(Hex(0, 0), Direction.NORTHEAST))
    assert z_north < 0


def test_pixel_positions_matches_scalar_version():
    hexes = spiral_grid(Hex(0, 0), 2)
    positions = pixel_positions(hexes)
    assert positions.shape == (19, 2)
    expected = np.array([axial_to_pixel(h) for h in hexes])
    assert np.allclose(positions, expected)
