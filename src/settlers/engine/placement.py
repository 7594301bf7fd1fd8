"""Structure placement legality and the local placement-mode state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .adjacency import (
    corners_adjacent_to_corner,
    corners_adjacent_to_edge,
    corners_of_hex,
    edges_adjacent_to_corner,
    edges_adjacent_to_edge,
    edges_of_hex,
)
from .board import Board
from .game_state import GameState
from .rules import RuleViolation
from .types import EdgeCoord, PlayerColor, StructureCoord, StructureType


class PlacementMode(str, Enum):
    SETTLEMENT = "settlement"
    CITY = "city"
    ROAD = "road"


@dataclass
class PlacementState:
    """What the local player is currently allowed to place; never networked."""

    active: List[PlacementMode] = field(default_factory=list)
    selected: Optional[StructureCoord] = None

    def activate(self, mode: PlacementMode) -> None:
        self.active.append(mode)

    def consume(self, mode: PlacementMode) -> None:
        if mode in self.active:
            self.active.remove(mode)

    def reset(self, modes: Iterable[PlacementMode] = ()) -> None:
        self.active = list(modes)
        self.selected = None


def setup_placement_mode(state: GameState, player: PlayerColor) -> PlacementMode:
    """Setup alternates settlement then road for each player."""
    owned = len(state.board_state.owned_by(player))
    return PlacementMode.SETTLEMENT if owned % 2 == 0 else PlacementMode.ROAD


def validate_placement(
    state: GameState,
    placement: PlacementState,
    coords: StructureCoord,
    player: PlayerColor,
) -> List[RuleViolation]:
    violations: List[RuleViolation] = []
    is_road = isinstance(coords, EdgeCoord)
    active = placement.active

    if is_road and PlacementMode.ROAD not in active:
        violations.append(RuleViolation(reason="road_not_active"))
        return violations
    if not is_road and PlacementMode.SETTLEMENT not in active and PlacementMode.CITY not in active:
        violations.append(RuleViolation(reason="settlement_not_active"))
        return violations

    board_state = state.board_state
    if not state.board.tiles_adjacent_to(coords):
        violations.append(RuleViolation(reason="off_board"))
        return violations

    existing = board_state.structure_at(coords)
    if existing is not None:
        if is_road or PlacementMode.CITY not in active:
            violations.append(RuleViolation(reason="occupied"))
        elif existing.player != player or existing.structure_type != StructureType.SETTLEMENT:
            violations.append(RuleViolation(reason="not_upgradeable"))
        return violations
    if not is_road and PlacementMode.SETTLEMENT not in active:
        violations.append(RuleViolation(reason="city_requires_settlement"))
        return violations

    if is_road:
        adjacent_roads = board_state.structures_at(edges_adjacent_to_edge(coords))
        adjacent_corners = board_state.structures_at(corners_adjacent_to_edge(coords))
        connected = any(s.player == player for s in adjacent_roads + adjacent_corners)
        if not connected:
            violations.append(RuleViolation(reason="road_not_connected"))
    else:
        if board_state.structures_at(corners_adjacent_to_corner(coords)):
            violations.append(RuleViolation(reason="too_close_to_settlement"))
    return violations


def is_legal_placement(
    state: GameState,
    placement: PlacementState,
    coords: StructureCoord,
    player: PlayerColor,
) -> bool:
    return not validate_placement(state, placement, coords, player)


def helper_slots(board: Board) -> List[StructureCoord]:
    """Every corner and edge touching a tile, once each, in tile order."""
    slots: Dict[StructureCoord, None] = {}
    for hex_ in board.tiles:
        for corner in corners_of_hex(hex_):
            slots.setdefault(corner, None)
        for edge in edges_of_hex(hex_):
            slots.setdefault(edge, None)
    return list(slots)


def legal_slots(
    state: GameState, placement: PlacementState, player: PlayerColor
) -> List[StructureCoord]:
    return [
        slot
        for slot in helper_slots(state.board)
        if is_legal_placement(state, placement, slot, player)
    ]


def get_valid_selected_helper(
    state: GameState,
    placement: PlacementState,
    hovered: Optional[StructureCoord],
    user_id: str,
) -> Optional[StructureCoord]:
    """The hovered slot if the local user may place there right now."""
    if hovered is None or not state.is_current_player(user_id):
        return None
    if is_legal_placement(state, placement, hovered, state.current_player):
        return hovered
    return None
