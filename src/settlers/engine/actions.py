"""Typed game actions and their ``{type, payload}`` wire form."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Mapping, Tuple, Union

from .adjacency import canonical_corner, canonical_edge
from .types import CornerCoord, EdgeCoord, PlayerColor, ResourceBank, ResourceType

WORLD_TOPIC = "world"


class ActionType(str, Enum):
    JOIN_GAME = "player.join_game"
    PLAYERS_READY = "player.players_ready"
    CHOOSE_COLOR = "setup.choose_color"
    ROLL_FOR_ORDER = "setup.roll_for_order"
    ROLL_RESOURCES = "game.roll_resources"
    REQUEST_TRADE = "game.request_trade"
    ACCEPT_TRADE = "game.accept_trade"
    DONE_TRADING = "game.done_trading"
    PURCHASE_ITEM = "game.purchase_item"
    BUILD_ROAD = "game.build_road"
    BUILD_SETTLEMENT = "game.build_settlement"
    BUILD_CITY = "game.build_city"
    END_TURN = "game.end_turn"


class ActionDecodeError(ValueError):
    """Raised when a wire message does not describe a valid action."""


@dataclass(frozen=True)
class JoinGame:
    action_type: ClassVar[ActionType] = ActionType.JOIN_GAME
    user_id: str


@dataclass(frozen=True)
class PlayersReady:
    action_type: ClassVar[ActionType] = ActionType.PLAYERS_READY


@dataclass(frozen=True)
class ChooseColor:
    action_type: ClassVar[ActionType] = ActionType.CHOOSE_COLOR
    user_id: str
    color: PlayerColor


@dataclass(frozen=True)
class RollForOrder:
    action_type: ClassVar[ActionType] = ActionType.ROLL_FOR_ORDER
    player: PlayerColor
    roll: Tuple[int, int]


@dataclass(frozen=True)
class RollResources:
    action_type: ClassVar[ActionType] = ActionType.ROLL_RESOURCES
    player: PlayerColor
    resources: ResourceBank = field(default_factory=dict)
    roll: int | None = None


@dataclass(frozen=True)
class RequestTrade:
    action_type: ClassVar[ActionType] = ActionType.REQUEST_TRADE
    player: PlayerColor
    give: ResourceBank
    receive: ResourceBank


@dataclass(frozen=True)
class AcceptTrade:
    action_type: ClassVar[ActionType] = ActionType.ACCEPT_TRADE
    player: PlayerColor
    give: ResourceBank
    receive: ResourceBank
    accepted: bool


@dataclass(frozen=True)
class DoneTrading:
    action_type: ClassVar[ActionType] = ActionType.DONE_TRADING
    player: PlayerColor


@dataclass(frozen=True)
class PurchaseItem:
    action_type: ClassVar[ActionType] = ActionType.PURCHASE_ITEM
    player: PlayerColor
    cost: ResourceBank


@dataclass(frozen=True)
class BuildRoad:
    action_type: ClassVar[ActionType] = ActionType.BUILD_ROAD
    player: PlayerColor
    coords: EdgeCoord


@dataclass(frozen=True)
class BuildSettlement:
    action_type: ClassVar[ActionType] = ActionType.BUILD_SETTLEMENT
    player: PlayerColor
    coords: CornerCoord


@dataclass(frozen=True)
class BuildCity:
    action_type: ClassVar[ActionType] = ActionType.BUILD_CITY
    player: PlayerColor
    coords: CornerCoord


@dataclass(frozen=True)
class EndTurn:
    action_type: ClassVar[ActionType] = ActionType.END_TURN
    player: PlayerColor


RosterAction = Union[JoinGame, PlayersReady]

GameAction = Union[
    ChooseColor,
    RollForOrder,
    RollResources,
    RequestTrade,
    AcceptTrade,
    DoneTrading,
    PurchaseItem,
    BuildRoad,
    BuildSettlement,
    BuildCity,
    EndTurn,
]

Action = Union[RosterAction, GameAction]


@dataclass(frozen=True)
class Envelope:
    """An action as carried by the bus; ``action_id`` makes redelivery detectable."""

    action: Action
    action_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    topic: str = WORLD_TOPIC


# -- encoding ---------------------------------------------------------------


def _bank_to_wire(bank: ResourceBank) -> Dict[str, int]:
    return {resource.value: int(amount) for resource, amount in bank.items()}


def encode_payload(action: Action) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for name, value in vars(action).items():
        if isinstance(value, (CornerCoord, EdgeCoord)):
            payload[name] = value.to_dict()
        elif isinstance(value, Enum):
            payload[name] = value.value
        elif isinstance(value, dict):
            payload[name] = _bank_to_wire(value)
        elif isinstance(value, tuple):
            payload[name] = list(value)
        else:
            payload[name] = value
    return payload


def encode_action(envelope: Envelope | Action) -> Dict[str, Any]:
    if not isinstance(envelope, Envelope):
        envelope = Envelope(action=envelope)
    return {
        "type": envelope.action.action_type.value,
        "payload": encode_payload(envelope.action),
        "id": envelope.action_id,
        "topic": envelope.topic,
    }


# -- decoding ---------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise ActionDecodeError(f"missing field {key!r}")
    return payload[key]


def _color(payload: Mapping[str, Any], key: str = "player") -> PlayerColor:
    try:
        return PlayerColor(_require(payload, key))
    except ValueError as exc:
        raise ActionDecodeError(f"invalid player color: {payload.get(key)!r}") from exc


def _user(payload: Mapping[str, Any]) -> str:
    user_id = _require(payload, "user_id")
    if not isinstance(user_id, str) or not user_id:
        raise ActionDecodeError("user_id must be a non-empty string")
    return user_id


def _bank(payload: Mapping[str, Any], key: str) -> ResourceBank:
    raw = _require(payload, key)
    if not isinstance(raw, Mapping):
        raise ActionDecodeError(f"{key} must be a mapping of resource to count")
    bank: ResourceBank = {}
    for name, amount in raw.items():
        try:
            resource = ResourceType(name)
        except ValueError as exc:
            raise ActionDecodeError(f"invalid resource: {name!r}") from exc
        if not _is_int(amount) or amount < 0:
            raise ActionDecodeError(f"resource count for {name!r} must be a non-negative integer")
        bank[resource] = amount
    return bank


def _coords(payload: Mapping[str, Any], canonicalize: Callable):
    raw = _require(payload, "coords")
    if not isinstance(raw, Mapping):
        raise ActionDecodeError("coords must be a mapping")
    q, r, direction = raw.get("q"), raw.get("r"), raw.get("direction")
    if not _is_int(q) or not _is_int(r) or not isinstance(direction, str):
        raise ActionDecodeError(f"malformed coords: {dict(raw)!r}")
    try:
        return canonicalize(q, r, direction)
    except ValueError as exc:
        raise ActionDecodeError(str(exc)) from exc


def _roll(payload: Mapping[str, Any]) -> Tuple[int, int]:
    raw = _require(payload, "roll")
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ActionDecodeError("roll must hold exactly two dice")
    if not all(_is_int(die) and 1 <= die <= 6 for die in raw):
        raise ActionDecodeError(f"dice out of range: {raw!r}")
    return int(raw[0]), int(raw[1])


def _flag(payload: Mapping[str, Any], key: str) -> bool:
    value = _require(payload, key)
    if not isinstance(value, bool):
        raise ActionDecodeError(f"{key} must be a boolean")
    return value


def _optional_int(payload: Mapping[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is not None and not _is_int(value):
        raise ActionDecodeError(f"{key} must be an integer")
    return value


_DECODERS: Dict[ActionType, Callable[[Mapping[str, Any]], Action]] = {
    ActionType.JOIN_GAME: lambda p: JoinGame(user_id=_user(p)),
    ActionType.PLAYERS_READY: lambda p: PlayersReady(),
    ActionType.CHOOSE_COLOR: lambda p: ChooseColor(user_id=_user(p), color=_color(p, "color")),
    ActionType.ROLL_FOR_ORDER: lambda p: RollForOrder(player=_color(p), roll=_roll(p)),
    ActionType.ROLL_RESOURCES: lambda p: RollResources(
        player=_color(p), resources=_bank(p, "resources"), roll=_optional_int(p, "roll")
    ),
    ActionType.REQUEST_TRADE: lambda p: RequestTrade(
        player=_color(p), give=_bank(p, "give"), receive=_bank(p, "receive")
    ),
    ActionType.ACCEPT_TRADE: lambda p: AcceptTrade(
        player=_color(p),
        give=_bank(p, "give"),
        receive=_bank(p, "receive"),
        accepted=_flag(p, "accepted"),
    ),
    ActionType.DONE_TRADING: lambda p: DoneTrading(player=_color(p)),
    ActionType.PURCHASE_ITEM: lambda p: PurchaseItem(player=_color(p), cost=_bank(p, "cost")),
    ActionType.BUILD_ROAD: lambda p: BuildRoad(player=_color(p), coords=_coords(p, canonical_edge)),
    ActionType.BUILD_SETTLEMENT: lambda p: BuildSettlement(
        player=_color(p), coords=_coords(p, canonical_corner)
    ),
    ActionType.BUILD_CITY: lambda p: BuildCity(player=_color(p), coords=_coords(p, canonical_corner)),
    ActionType.END_TURN: lambda p: EndTurn(player=_color(p)),
}


def decode_action(message: Mapping[str, Any]) -> Envelope:
    """Validate a wire message and turn it into an :class:`Envelope`.

    Coordinates are canonicalised here, so reducers only ever see the
    ``N``/``S`` and ``E``/``SE``/``SW`` encodings.
    """
    if not isinstance(message, Mapping):
        raise ActionDecodeError("action must be a mapping")
    try:
        action_type = ActionType(message.get("type"))
    except ValueError as exc:
        raise ActionDecodeError(f"unknown action type: {message.get('type')!r}") from exc
    payload = message.get("payload", {})
    if not isinstance(payload, Mapping):
        raise ActionDecodeError("payload must be a mapping")
    action = _DECODERS[action_type](payload)

    topic = message.get("topic", WORLD_TOPIC)
    action_id = message.get("id")
    if action_id is None:
        return Envelope(action=action, topic=topic)
    if not isinstance(action_id, str):
        raise ActionDecodeError("id must be a string")
    return Envelope(action=action, action_id=action_id, topic=topic)
