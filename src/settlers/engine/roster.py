from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .actions import ActionType, JoinGame, PlayersReady

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4


@dataclass
class PlayerRosterState:
    players_ready: bool = False
    players: List[str] = field(default_factory=list)

    @property
    def can_start(self) -> bool:
        return not self.players_ready and MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS


def _receive_join(state: PlayerRosterState, action: JoinGame) -> None:
    if state.players_ready:
        logger.info("game already started, %s cannot join", action.user_id)
        return
    if action.user_id in state.players:
        return
    if len(state.players) >= MAX_PLAYERS:
        logger.info("table is full, %s cannot join", action.user_id)
        return
    state.players.append(action.user_id)


def _receive_ready(state: PlayerRosterState, action: PlayersReady) -> None:
    state.players_ready = True


def apply_roster_action(state: PlayerRosterState, action) -> PlayerRosterState:
    if action.action_type == ActionType.JOIN_GAME:
        next_state = PlayerRosterState(state.players_ready, list(state.players))
        _receive_join(next_state, action)
        return next_state
    if action.action_type == ActionType.PLAYERS_READY:
        next_state = PlayerRosterState(state.players_ready, list(state.players))
        _receive_ready(next_state, action)
        return next_state
    return state
