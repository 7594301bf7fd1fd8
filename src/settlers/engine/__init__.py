"""Core rules engine: hex math, adjacency, board, placement, turn state machine."""

from .actions import Action, ActionDecodeError, ActionType, Envelope, decode_action, encode_action
from .board import Board, BoardState, random_board, starter_board
from .game_state import GameState, TurnPhase, initial_game_state
from .placement import PlacementMode, PlacementState, validate_placement
from .roster import PlayerRosterState, apply_roster_action
from .rules import apply_action, roll_for_resources
from .types import PlayerColor, ResourceType, StructureType, TerrainType

__all__ = [
    "Action",
    "ActionDecodeError",
    "ActionType",
    "Envelope",
    "decode_action",
    "encode_action",
    "Board",
    "BoardState",
    "random_board",
    "starter_board",
    "GameState",
    "TurnPhase",
    "initial_game_state",
    "PlacementMode",
    "PlacementState",
    "validate_placement",
    "PlayerRosterState",
    "apply_roster_action",
    "apply_action",
    "roll_for_resources",
    "PlayerColor",
    "ResourceType",
    "StructureType",
    "TerrainType",
]
