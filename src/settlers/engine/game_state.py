from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .board import Board, BoardState
from .types import PlayerColor, ResourceBank, Structure


class TurnPhase(str, Enum):
    CHOOSE_COLORS = "choose-colors"
    SETUP_ROLL = "setup-roll"
    SETUP_FIRST = "setup-first"
    SETUP_SECOND = "setup-second"
    ROLL = "roll"
    TRADE = "trade"
    BUILD = "build"


SETUP_BUILD_PHASES = (TurnPhase.SETUP_FIRST, TurnPhase.SETUP_SECOND)


@dataclass(frozen=True)
class OrderEntry:
    player: PlayerColor
    roll: int


@dataclass(frozen=True)
class TradeOffer:
    player: PlayerColor
    give: ResourceBank
    receive: ResourceBank


@dataclass
class GameState:
    board: Board
    players: Tuple[str, ...]
    current_player: PlayerColor | None = None
    player_colors: Dict[PlayerColor, str] = field(default_factory=dict)
    player_order: List[OrderEntry] = field(default_factory=list)
    phase: TurnPhase = TurnPhase.CHOOSE_COLORS
    resources: Dict[PlayerColor, ResourceBank] = field(default_factory=dict)
    structures: List[Structure] = field(default_factory=list)
    last_roll: int | None = None
    turn_index: int = 0
    pending_trade: TradeOffer | None = None

    @property
    def board_state(self) -> BoardState:
        return BoardState(self.board, self.structures)

    def color_of(self, user_id: str) -> Optional[PlayerColor]:
        for color, owner in self.player_colors.items():
            if owner == user_id:
                return color
        return None

    def is_current_player(self, user_id: str) -> bool:
        if self.current_player is None:
            return False
        return self.player_colors.get(self.current_player) == user_id

    def order_index(self, player: PlayerColor | None) -> int:
        for idx, entry in enumerate(self.player_order):
            if entry.player == player:
                return idx
        return -1

    def has_rolled_for_order(self, player: PlayerColor) -> bool:
        return self.order_index(player) >= 0

    def next_player(self) -> PlayerColor | None:
        if not self.player_order:
            return None
        idx = (self.order_index(self.current_player) + 1) % len(self.player_order)
        return self.player_order[idx].player

    def apply(self, action) -> "GameState":
        from .rules import apply_action

        return apply_action(self, action)


def clone_state(state: GameState) -> GameState:
    return GameState(
        board=state.board,
        players=tuple(state.players),
        current_player=state.current_player,
        player_colors=dict(state.player_colors),
        player_order=list(state.player_order),
        phase=state.phase,
        resources={color: dict(bank) for color, bank in state.resources.items()},
        structures=list(state.structures),
        last_roll=state.last_roll,
        turn_index=state.turn_index,
        pending_trade=state.pending_trade,
    )


def initial_game_state(board: Board, players: Sequence[str]) -> GameState:
    return GameState(board=board, players=tuple(players))
