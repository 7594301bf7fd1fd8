import pytest

from settlers.engine.adjacency import (
    canonical_corner,
    canonical_edge,
    corners_adjacent_to_corner,
    corners_adjacent_to_edge,
    corners_of_hex,
    edges_adjacent_to_corner,
    edges_adjacent_to_edge,
    edges_of_hex,
    hexes_adjacent_to_structure,
    is_corner_direction,
    is_edge_direction,
)
from settlers.engine.hexgrid import spiral_grid
from settlers.engine.types import (
    CornerCoord,
    CornerDirection,
    EdgeCoord,
    EdgeDirection,
    Hex,
    PlayerColor,
    Structure,
    StructureType,
)

HEXES = spiral_grid(Hex(0, 0), 3)
CORNERS = [CornerCoord(h.q, h.r, d) for h in HEXES for d in CornerDirection]
EDGES = [EdgeCoord(h.q, h.r, d) for h in HEXES for d in EdgeDirection]


def test_edge_and_corner_adjacency_close_over_each_other():
    for edge in EDGES:
        for corner in corners_adjacent_to_edge(edge):
            assert edge in edges_adjacent_to_corner(corner)
    for corner in CORNERS:
        for edge in edges_adjacent_to_corner(corner):
            assert corner in corners_adjacent_to_edge(edge)


def test_corner_neighbors_are_symmetric_and_one_edge_away():
    for corner in CORNERS:
        neighbors = corners_adjacent_to_corner(corner)
        assert len(set(neighbors)) == 3
        assert corner not in neighbors
        via_edges = {
            other
            for edge in edges_adjacent_to_corner(corner)
            for other in corners_adjacent_to_edge(edge)
        } - {corner}
        assert set(neighbors) == via_edges
        for other in neighbors:
            assert corner in corners_adjacent_to_corner(other)


def test_edge_neighbors_share_an_endpoint():
    for edge in EDGES:
        neighbors = edges_adjacent_to_edge(edge)
        assert len(set(neighbors)) == 4
        assert edge not in neighbors
        via_corners = {
            other
            for corner in corners_adjacent_to_edge(edge)
            for other in edges_adjacent_to_corner(corner)
        } - {edge}
        assert set(neighbors) == via_corners
        for other in neighbors:
            assert edge in edges_adjacent_to_edge(other)


def test_edge_adjacency_tables():
    assert edges_adjacent_to_edge(EdgeCoord(0, 0, EdgeDirection.SE)) == [
        EdgeCoord(0, 0, EdgeDirection.E),
        EdgeCoord(1, 0, EdgeDirection.SW),
        EdgeCoord(-1, 1, EdgeDirection.E),
        EdgeCoord(0, 0, EdgeDirection.SW),
    ]
    assert corners_adjacent_to_edge(EdgeCoord(2, 1, EdgeDirection.E)) == [
        CornerCoord(3, 0, CornerDirection.S),
        CornerCoord(2, 2, CornerDirection.N),
    ]


def test_hexes_adjacent_to_corner_structures():
    settlement = Structure(PlayerColor.RED, StructureType.SETTLEMENT, CornerCoord(0, 0, CornerDirection.N))
    assert hexes_adjacent_to_structure(settlement) == [Hex(0, 0), Hex(1, -1), Hex(0, -1)]
    assert hexes_adjacent_to_structure(CornerCoord(0, 0, CornerDirection.S)) == [
        Hex(0, 0),
        Hex(0, 1),
        Hex(-1, 1),
    ]


def test_hexes_adjacent_to_edge_structures_pad_first_slot():
    assert hexes_adjacent_to_structure(EdgeCoord(0, 0, EdgeDirection.E)) == [None, Hex(0, 0), Hex(1, 0)]
    assert hexes_adjacent_to_structure(EdgeCoord(0, 0, EdgeDirection.SE)) == [None, Hex(0, 0), Hex(0, 1)]
    assert hexes_adjacent_to_structure(EdgeCoord(0, 0, EdgeDirection.SW)) == [None, Hex(-1, 1), Hex(0, 0)]


def test_structures_touch_the_hexes_listing_them():
    for corner in CORNERS:
        for h in hexes_adjacent_to_structure(corner):
            assert corner in corners_of_hex(h)
    for edge in EDGES:
        for h in hexes_adjacent_to_structure(edge)[1:]:
            assert edge in edges_of_hex(h)


def test_canonical_aliases_collapse_to_one_encoding():
    assert canonical_corner(0, 0, "NE") == CornerCoord(1, -1, CornerDirection.S)
    assert canonical_corner(0, -1, "se") == CornerCoord(0, 0, CornerDirection.N)
    assert canonical_corner(1, -1, "SW") == CornerCoord(0, 0, CornerDirection.N)
    assert canonical_edge(1, 0, "W") == EdgeCoord(0, 0, EdgeDirection.E)
    assert canonical_edge(0, 1, "NW") == EdgeCoord(0, 0, EdgeDirection.SE)
    assert canonical_edge(-1, 1, "NE") == EdgeCoord(0, 0, EdgeDirection.SW)


def test_hex_has_six_distinct_corners_and_edges():
    assert len(set(corners_of_hex(Hex(2, -1)))) == 6
    assert len(set(edges_of_hex(Hex(2, -1)))) == 6


def test_unknown_direction_rejected():
    with pytest.raises(ValueError):
        canonical_corner(0, 0, "E")
    with pytest.raises(ValueError):
        canonical_edge(0, 0, "N")


def test_direction_kind():
    assert is_corner_direction("N") and is_corner_direction(CornerDirection.S)
    assert is_edge_direction(EdgeDirection.SW) and not is_edge_direction("N")
