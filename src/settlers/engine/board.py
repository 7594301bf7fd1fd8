from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .adjacency import hexes_adjacent_to_structure
from .hexgrid import Direction, cube_neighbor, pixel_positions, spiral_grid
from .types import (
    Hex,
    PlayerColor,
    ResourceType,
    Structure,
    StructureCoord,
    StructureType,
    TerrainType,
    Tile,
)

BOARD_RADIUS = 2

H, F, M, FI, P, D = (
    TerrainType.HILLS,
    TerrainType.FOREST,
    TerrainType.MOUNTAINS,
    TerrainType.FIELDS,
    TerrainType.PASTURE,
    TerrainType.DESERT,
)

# (q, r, terrain, number) rows of the beginner board, north to south.
STARTER_LAYOUT: Tuple[Tuple[int, int, TerrainType, int | None], ...] = (
    (0, -2, M, 10), (1, -2, P, 2), (2, -2, F, 9),
    (-1, -1, FI, 12), (0, -1, H, 6), (1, -1, P, 4), (2, -1, H, 10),
    (-2, 0, FI, 9), (-1, 0, F, 11), (0, 0, D, None), (1, 0, F, 3), (2, 0, M, 8),
    (-2, 1, F, 8), (-1, 1, M, 3), (0, 1, FI, 4), (1, 1, P, 5),
    (-2, 2, H, 5), (-1, 2, FI, 6), (0, 2, P, 11),
)  # fmt: skip

STANDARD_TERRAINS = [H] * 3 + [F] * 4 + [M] * 3 + [FI] * 4 + [P] * 4 + [D]

STANDARD_NUMBER_TOKENS = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]


@dataclass(frozen=True)
class NumberShuffleConstraints:
    no_adjacent_six_eight: bool = True
    no_adjacent_same_number: bool = False
    no_adjacent_two_twelve: bool = False
    max_attempts: int = 5000


@dataclass(frozen=True)
class Board:
    tiles: Dict[Hex, Tile]

    def tile_at(self, hex_: Hex | None) -> Tile | None:
        if hex_ is None:
            return None
        return self.tiles.get(Hex(hex_.q, hex_.r))

    def tile_neighbors(self, hex_: Hex) -> List[Tile]:
        neighbors = (self.tile_at(cube_neighbor(hex_, d)) for d in Direction)
        return [tile for tile in neighbors if tile is not None]

    def tiles_adjacent_to(self, structure: Structure | StructureCoord) -> List[Tile]:
        """Existing tiles touching a structure; off-board slots are skipped."""
        tiles = (self.tile_at(h) for h in hexes_adjacent_to_structure(structure))
        return [tile for tile in tiles if tile is not None]

    def positions(self):
        """``(n, 2)`` planar positions of the tiles, in ``tiles`` order."""
        return pixel_positions(self.tiles.keys())


def board_from_layout(rows: Iterable[Tuple[int, int, TerrainType, int | None]]) -> Board:
    tiles: Dict[Hex, Tile] = {}
    for q, r, terrain, number in rows:
        hex_ = Hex(q, r)
        tiles[hex_] = Tile(hex=hex_, terrain=TerrainType(terrain), number=number)
    return Board(tiles=tiles)


def starter_board() -> Board:
    return board_from_layout(STARTER_LAYOUT)


def _numbers_valid(
    numbers_by_hex: Dict[Hex, int],
    constraints: NumberShuffleConstraints,
) -> bool:
    for hex_, value in numbers_by_hex.items():
        for direction in Direction:
            neighbor = cube_neighbor(hex_, direction)
            if neighbor not in numbers_by_hex:
                continue
            other = numbers_by_hex[neighbor]
            if constraints.no_adjacent_six_eight and value in (6, 8) and other in (6, 8):
                return False
            if constraints.no_adjacent_same_number and value == other:
                return False
            if constraints.no_adjacent_two_twelve and value in (2, 12) and other in (2, 12):
                return False
    return True


def _assign_numbers(
    hexes: List[Hex],
    numbers: List[int],
    rng,
    constraints: NumberShuffleConstraints,
) -> Dict[Hex, int]:
    for _ in range(constraints.max_attempts):
        rng.shuffle(numbers)
        numbers_by_hex = {hex_: numbers[idx] for idx, hex_ in enumerate(hexes)}
        if _numbers_valid(numbers_by_hex, constraints):
            return numbers_by_hex
    raise RuntimeError("Failed to assign numbers within constraints")


def random_board(
    seed: int | None = None, constraints: NumberShuffleConstraints | None = None
) -> Board:
    import random

    rng = random.Random(seed)
    coords = spiral_grid(Hex(0, 0), BOARD_RADIUS)
    terrains = list(STANDARD_TERRAINS)
    numbers = list(STANDARD_NUMBER_TOKENS)
    if constraints is None:
        constraints = NumberShuffleConstraints()

    rng.shuffle(terrains)
    producing = [hex_ for hex_, terrain in zip(coords, terrains) if terrain != TerrainType.DESERT]
    numbers_by_hex = _assign_numbers(producing, numbers, rng, constraints)

    return board_from_layout(
        (hex_.q, hex_.r, terrain, numbers_by_hex.get(hex_))
        for hex_, terrain in zip(coords, terrains)
    )


class BoardState:
    """Read-only view joining the tiles with the placed structures."""

    def __init__(self, board: Board, structures: Sequence[Structure]):
        self.board = board
        self.structures = structures
        self._by_coords: Dict[StructureCoord, Structure] = {}
        for structure in structures:
            self._by_coords[structure.coords] = structure

    def structure_at(self, coords: StructureCoord) -> Optional[Structure]:
        return self._by_coords.get(coords)

    def structures_at(self, coords: Iterable[StructureCoord]) -> List[Structure]:
        found = (self._by_coords.get(c) for c in coords)
        return [structure for structure in found if structure is not None]

    def owned_by(self, player: PlayerColor) -> List[Structure]:
        return [s for s in self.structures if s.player == player]

    def buildings_of(self, player: PlayerColor) -> List[Structure]:
        return [s for s in self.owned_by(player) if s.structure_type != StructureType.ROAD]

    def resources_touching(self, structure: Structure) -> List[ResourceType]:
        resources = (tile.resource for tile in self.board.tiles_adjacent_to(structure))
        return [resource for resource in resources if resource is not None]
