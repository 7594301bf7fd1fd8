"""Action bus and per-peer session replica.

Every peer owns a :class:`GameSession`. Peers never touch each other's state;
they converge because the :class:`ActionBus` hands each of them the same
envelopes in the same order and the reducers are deterministic.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Set

from settlers.engine.actions import (
    WORLD_TOPIC,
    Action,
    ActionDecodeError,
    ActionType,
    Envelope,
    decode_action,
    encode_action,
)
from settlers.engine.board import Board, starter_board
from settlers.engine.game_state import GameState, initial_game_state
from settlers.engine.roster import PlayerRosterState, apply_roster_action
from settlers.engine.rules import apply_action

logger = logging.getLogger(__name__)

ROSTER_ACTIONS = (ActionType.JOIN_GAME, ActionType.PLAYERS_READY)

Subscriber = Callable[[Envelope], None]


class ActionBus:
    """Ordered broadcast of envelopes to every subscriber, sender included.

    Envelopes dispatched while a delivery is in progress are queued, so all
    subscribers observe one global order.
    """

    def __init__(self, topic: str = WORLD_TOPIC):
        self.topic = topic
        self.log: List[Envelope] = []
        self._subscribers: List[Subscriber] = []
        self._pending: Deque[Envelope] = deque()
        self._delivering = False

    def subscribe(self, subscriber: Subscriber, replay: bool = True) -> None:
        self._subscribers.append(subscriber)
        if replay:
            for envelope in list(self.log):
                subscriber(envelope)

    def dispatch(self, action: Action | Envelope) -> Envelope:
        envelope = action if isinstance(action, Envelope) else Envelope(action=action, topic=self.topic)
        self._pending.append(envelope)
        if not self._delivering:
            self._drain()
        return envelope

    def dispatch_wire(self, message: Mapping[str, Any]) -> Optional[Envelope]:
        """Decode and dispatch a wire message; malformed messages are dropped."""
        try:
            envelope = decode_action(message)
        except ActionDecodeError as exc:
            logger.warning("dropping malformed action %r: %s", message.get("type"), exc)
            return None
        if envelope.topic != self.topic:
            logger.debug("dropping action for topic %s", envelope.topic)
            return None
        return self.dispatch(envelope)

    def actions_since(self, index: int) -> List[Dict[str, Any]]:
        return [encode_action(envelope) for envelope in self.log[max(index, 0):]]

    def _drain(self) -> None:
        self._delivering = True
        try:
            while self._pending:
                envelope = self._pending.popleft()
                self.log.append(envelope)
                for subscriber in list(self._subscribers):
                    subscriber(envelope)
        finally:
            self._delivering = False


class GameSession:
    """One peer's replica of the roster and game state."""

    def __init__(
        self,
        user_id: str,
        bus: ActionBus | None = None,
        board_factory: Callable[[], Board] = starter_board,
    ):
        self.user_id = user_id
        self.bus = bus
        self.board_factory = board_factory
        self.roster = PlayerRosterState()
        self.game: GameState | None = None
        self._seen: Set[str] = set()
        self._observers: List[Callable[["GameSession"], None]] = []
        if bus is not None:
            bus.subscribe(self.receive)

    def subscribe(self, observer: Callable[["GameSession"], None]) -> None:
        self._observers.append(observer)

    def dispatch(self, action: Action) -> Envelope:
        envelope = Envelope(action=action)
        if self.bus is None:
            self.receive(envelope)
        else:
            self.bus.dispatch(envelope)
        return envelope

    def receive(self, envelope: Envelope) -> None:
        if envelope.action_id in self._seen:
            logger.debug("duplicate delivery of %s ignored", envelope.action_id)
            return
        self._seen.add(envelope.action_id)

        action = envelope.action
        if action.action_type in ROSTER_ACTIONS:
            self.roster = apply_roster_action(self.roster, action)
            if self.roster.players_ready and self.game is None:
                self.game = initial_game_state(self.board_factory(), self.roster.players)
                logger.info("game started with %d players", len(self.roster.players))
        elif self.game is None:
            logger.debug("game not started, dropping %s", action.action_type.value)
            return
        else:
            self.game = apply_action(self.game, action)

        for observer in list(self._observers):
            observer(self)


def serialize_state(session: GameSession) -> Dict[str, Any]:
    """JSON-ready snapshot for rendering and UI gating."""
    snapshot: Dict[str, Any] = {
        "players_ready": session.roster.players_ready,
        "players": list(session.roster.players),
        "game": None,
    }
    state = session.game
    if state is None:
        return snapshot

    positions = state.board.positions()
    snapshot["game"] = {
        "phase": state.phase.value,
        "current_player": state.current_player.value if state.current_player else None,
        "turn_index": state.turn_index,
        "last_roll": state.last_roll,
        "player_colors": {color.value: user for color, user in state.player_colors.items()},
        "player_order": [
            {"player": entry.player.value, "roll": entry.roll} for entry in state.player_order
        ],
        "tiles": [
            {
                "q": tile.hex.q,
                "r": tile.hex.r,
                "terrain": tile.terrain.value,
                "number": tile.number,
                "position": [float(x), float(z)],
            }
            for tile, (x, z) in zip(state.board.tiles.values(), positions)
        ],
        "structures": [structure.to_dict() for structure in state.structures],
        "resources": {
            color.value: {resource.value: count for resource, count in bank.items()}
            for color, bank in state.resources.items()
        },
        "pending_trade": None
        if state.pending_trade is None
        else {
            "player": state.pending_trade.player.value,
            "give": {k.value: v for k, v in state.pending_trade.give.items()},
            "receive": {k.value: v for k, v in state.pending_trade.receive.items()},
        },
    }
    return snapshot
