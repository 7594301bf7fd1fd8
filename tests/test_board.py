from collections import Counter

from settlers.engine.board import (
    STANDARD_NUMBER_TOKENS,
    BoardState,
    board_from_layout,
    random_board,
    starter_board,
)
from settlers.engine.placement import helper_slots
from settlers.engine.types import (
    CornerCoord,
    CornerDirection,
    EdgeCoord,
    EdgeDirection,
    Hex,
    PlayerColor,
    ResourceType,
    Structure,
    StructureType,
    TerrainType,
)


def test_starter_board_counts():
    board = starter_board()
    assert len(board.tiles) == 19
    terrains = Counter(tile.terrain for tile in board.tiles.values())
    assert terrains == {
        TerrainType.HILLS: 3,
        TerrainType.FOREST: 4,
        TerrainType.MOUNTAINS: 3,
        TerrainType.FIELDS: 4,
        TerrainType.PASTURE: 4,
        TerrainType.DESERT: 1,
    }
    numbers = sorted(tile.number for tile in board.tiles.values() if tile.number is not None)
    assert numbers == sorted(STANDARD_NUMBER_TOKENS)


def test_board_has_54_corners_and_72_edges():
    slots = helper_slots(starter_board())
    corners = [slot for slot in slots if isinstance(slot, CornerCoord)]
    edges = [slot for slot in slots if isinstance(slot, EdgeCoord)]
    assert len(corners) == 54
    assert len(edges) == 72


def test_desert_has_no_number_or_resource():
    board = random_board(seed=7)
    deserts = [tile for tile in board.tiles.values() if tile.terrain == TerrainType.DESERT]
    assert len(deserts) == 1
    assert deserts[0].number is None
    assert deserts[0].resource is None


def test_no_adjacent_six_or_eight():
    board = random_board(seed=11)
    for hex_, tile in board.tiles.items():
        if tile.number not in (6, 8):
            continue
        for neighbor in board.tile_neighbors(hex_):
            assert neighbor.number not in (6, 8)


def test_random_board_is_reproducible():
    assert random_board(seed=3) == random_board(seed=3)


def test_terrain_maps_to_resource():
    board = starter_board()
    assert board.tile_at(Hex(0, -1)).resource == ResourceType.BRICK
    assert board.tile_at(Hex(2, -2)).resource == ResourceType.LUMBER
    assert board.tile_at(Hex(5, 5)) is None


def test_tiles_adjacent_skip_off_board_hexes():
    board = starter_board()
    corner = CornerCoord(2, -2, CornerDirection.N)
    assert [tile.hex for tile in board.tiles_adjacent_to(corner)] == [Hex(2, -2)]
    edge = EdgeCoord(0, 0, EdgeDirection.E)
    assert [tile.hex for tile in board.tiles_adjacent_to(edge)] == [Hex(0, 0), Hex(1, 0)]


def test_board_state_queries():
    board = board_from_layout([(0, 0, TerrainType.HILLS, 6), (1, -1, TerrainType.DESERT, None)])
    settlement = Structure(PlayerColor.RED, StructureType.SETTLEMENT, CornerCoord(0, 0, CornerDirection.N))
    road = Structure(PlayerColor.BLUE, StructureType.ROAD, EdgeCoord(0, 0, EdgeDirection.E))
    state = BoardState(board, [settlement, road])

    assert state.structure_at(CornerCoord(0, 0, CornerDirection.N)) == settlement
    assert state.structure_at(CornerCoord(0, 0, CornerDirection.S)) is None
    assert state.buildings_of(PlayerColor.RED) == [settlement]
    assert state.buildings_of(PlayerColor.BLUE) == []
    assert state.resources_touching(settlement) == [ResourceType.BRICK]


def test_positions_follow_tile_order():
    board = starter_board()
    positions = board.positions()
    assert positions.shape == (19, 2)
    assert list(positions[9]) == [0.0, 0.0]
