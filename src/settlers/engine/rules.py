from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from .actions import (
    AcceptTrade,
    ActionType,
    BuildCity,
    BuildRoad,
    BuildSettlement,
    ChooseColor,
    DoneTrading,
    EndTurn,
    PurchaseItem,
    RequestTrade,
    RollForOrder,
    RollResources,
)
from .game_state import GameState, OrderEntry, TradeOffer, TurnPhase, clone_state
from .types import PlayerColor, ResourceBank, ResourceType, Structure, StructureType

logger = logging.getLogger(__name__)


class Item(str, Enum):
    ROAD = "road"
    SETTLEMENT = "settlement"
    CITY = "city"
    DEVELOPMENT_CARD = "development_card"


COSTS: Dict[Item, ResourceBank] = {
    Item.ROAD: {
        ResourceType.LUMBER: 1,
        ResourceType.BRICK: 1,
    },
    Item.SETTLEMENT: {
        ResourceType.LUMBER: 1,
        ResourceType.BRICK: 1,
        ResourceType.GRAIN: 1,
        ResourceType.WOOL: 1,
    },
    Item.CITY: {
        ResourceType.GRAIN: 2,
        ResourceType.ORE: 3,
    },
    Item.DEVELOPMENT_CARD: {
        ResourceType.GRAIN: 1,
        ResourceType.WOOL: 1,
        ResourceType.ORE: 1,
    },
}

YIELD_BY_STRUCTURE = {
    StructureType.SETTLEMENT: 1,
    StructureType.CITY: 2,
}


@dataclass(frozen=True)
class RuleViolation:
    reason: str


def can_afford(resources: ResourceBank | None, cost: ResourceBank) -> bool:
    resources = resources or {}
    return all(resources.get(key, 0) >= amount for key, amount in cost.items())


def is_valid_bank(bank: ResourceBank) -> bool:
    return all(amount >= 0 for amount in bank.values())


def _credit(state: GameState, player: PlayerColor, award: ResourceBank) -> None:
    ledger = state.resources.setdefault(player, {})
    for resource, amount in award.items():
        ledger[resource] = ledger.get(resource, 0) + amount


def _debit(state: GameState, player: PlayerColor, cost: ResourceBank) -> None:
    ledger = state.resources.setdefault(player, {})
    for resource, amount in cost.items():
        ledger[resource] = ledger.get(resource, 0) - amount


# -- local intents ----------------------------------------------------------


def roll_dice(rng: random.Random | None = None) -> Tuple[int, int]:
    rng = rng or random
    return rng.randint(1, 6), rng.randint(1, 6)


def roll_for_resources(
    state: GameState,
    dice: Tuple[int, int] | None = None,
    rng: random.Random | None = None,
) -> RollResources:
    """Roll for the current player and collect what their buildings produce.

    Runs on the rolling peer only; the result travels as one
    :class:`RollResources` action so every peer credits the same amounts.
    """
    if dice is None:
        dice = roll_dice(rng)
    combined = sum(dice)
    player = state.current_player
    board_state = state.board_state

    award: ResourceBank = {}
    for structure in board_state.buildings_of(player):
        count = YIELD_BY_STRUCTURE[structure.structure_type]
        for tile in state.board.tiles_adjacent_to(structure):
            if tile.number != combined or tile.resource is None:
                continue
            award[tile.resource] = award.get(tile.resource, 0) + count

    logger.info("%s rolled %d (%d+%d)", player.value if player else None, combined, *dice)
    return RollResources(player=player, resources=award, roll=combined)


def starting_hand(state: GameState, player: PlayerColor) -> ResourceBank:
    """One card per producing hex around the player's latest settlement."""
    latest = None
    for structure in reversed(state.structures):
        if structure.player == player and structure.structure_type == StructureType.SETTLEMENT:
            latest = structure
            break
    hand: ResourceBank = {}
    if latest is None:
        return hand
    for resource in state.board_state.resources_touching(latest):
        hand[resource] = hand.get(resource, 0) + 1
    return hand


# -- receptors --------------------------------------------------------------


def _receive_choose_color(state: GameState, action: ChooseColor) -> None:
    if action.user_id not in state.players:
        logger.debug("ignoring color choice from unknown user %s", action.user_id)
        return
    if action.color in state.player_colors:
        logger.debug("color %s already taken", action.color.value)
        return
    if state.color_of(action.user_id) is not None:
        return
    state.player_colors[action.color] = action.user_id
    if state.phase == TurnPhase.CHOOSE_COLORS and len(state.player_colors) == len(state.players):
        state.phase = TurnPhase.SETUP_ROLL


def _receive_roll_for_order(state: GameState, action: RollForOrder) -> None:
    if state.phase != TurnPhase.SETUP_ROLL or action.player not in state.player_colors:
        return
    if state.has_rolled_for_order(action.player):
        return
    state.player_order.append(OrderEntry(player=action.player, roll=sum(action.roll)))
    if len(state.player_order) < len(state.players):
        return

    rolls = [entry.roll for entry in state.player_order]
    if len(set(rolls)) != len(rolls):
        logger.info("tied order rolls %s, everyone rolls again", rolls)
        state.player_order = []
        return
    state.player_order.sort(key=lambda entry: entry.roll, reverse=True)
    state.current_player = state.player_order[0].player
    state.phase = TurnPhase.SETUP_FIRST


def _receive_build_settlement(state: GameState, action: BuildSettlement) -> None:
    state.structures.append(Structure(action.player, StructureType.SETTLEMENT, action.coords))


def _receive_build_city(state: GameState, action: BuildCity) -> None:
    for idx, structure in enumerate(state.structures):
        if structure.coords != action.coords:
            continue
        if structure.player == action.player and structure.structure_type == StructureType.SETTLEMENT:
            state.structures[idx] = Structure(action.player, StructureType.CITY, action.coords)
            return
    logger.debug("no settlement of %s to upgrade at %s", action.player.value, action.coords)


def _grant_starting_hands(state: GameState) -> None:
    for entry in state.player_order:
        _credit(state, entry.player, starting_hand(state, entry.player))


def _receive_build_road(state: GameState, action: BuildRoad) -> None:
    state.structures.append(Structure(action.player, StructureType.ROAD, action.coords))

    if state.phase not in (TurnPhase.SETUP_FIRST, TurnPhase.SETUP_SECOND):
        return
    idx = state.order_index(action.player)
    if idx < 0:
        return
    if state.phase == TurnPhase.SETUP_FIRST:
        if idx == len(state.player_order) - 1:
            state.phase = TurnPhase.SETUP_SECOND
        else:
            state.current_player = state.player_order[idx + 1].player
    elif idx == 0:
        _grant_starting_hands(state)
        state.phase = TurnPhase.ROLL
    else:
        state.current_player = state.player_order[idx - 1].player


def _receive_roll_resources(state: GameState, action: RollResources) -> None:
    if action.player is None or not is_valid_bank(action.resources):
        logger.warning("ignoring invalid resource roll %s", action)
        return
    _credit(state, action.player, action.resources)
    state.last_roll = action.roll
    state.phase = TurnPhase.BUILD


def _receive_purchase_item(state: GameState, action: PurchaseItem) -> None:
    if not is_valid_bank(action.cost):
        logger.warning("ignoring purchase with negative cost %s", action.cost)
        return
    if not can_afford(state.resources.get(action.player), action.cost):
        logger.warning("rejecting purchase by %s: cannot afford %s", action.player.value, action.cost)
        return
    _debit(state, action.player, action.cost)


def _receive_request_trade(state: GameState, action: RequestTrade) -> None:
    if not is_valid_bank(action.give) or not is_valid_bank(action.receive):
        return
    state.pending_trade = TradeOffer(player=action.player, give=dict(action.give), receive=dict(action.receive))


def _receive_accept_trade(state: GameState, action: AcceptTrade) -> None:
    offer = state.pending_trade
    if offer is None or offer.player == action.player:
        return
    if not is_valid_bank(offer.give) or not is_valid_bank(offer.receive):
        return
    if offer.give != action.give or offer.receive != action.receive:
        return
    state.pending_trade = None
    if not action.accepted:
        return
    if not can_afford(state.resources.get(offer.player), offer.give):
        return
    if not can_afford(state.resources.get(action.player), offer.receive):
        return
    _debit(state, offer.player, offer.give)
    _credit(state, action.player, offer.give)
    _debit(state, action.player, offer.receive)
    _credit(state, offer.player, offer.receive)


def _receive_done_trading(state: GameState, action: DoneTrading) -> None:
    state.pending_trade = None
    state.phase = TurnPhase.BUILD


def _receive_end_turn(state: GameState, action: EndTurn) -> None:
    state.current_player = state.next_player()
    state.phase = TurnPhase.ROLL
    state.turn_index += 1
    state.last_roll = None
    state.pending_trade = None


RECEPTORS: Dict[ActionType, Callable] = {
    ActionType.CHOOSE_COLOR: _receive_choose_color,
    ActionType.ROLL_FOR_ORDER: _receive_roll_for_order,
    ActionType.BUILD_SETTLEMENT: _receive_build_settlement,
    ActionType.BUILD_CITY: _receive_build_city,
    ActionType.BUILD_ROAD: _receive_build_road,
    ActionType.ROLL_RESOURCES: _receive_roll_resources,
    ActionType.PURCHASE_ITEM: _receive_purchase_item,
    ActionType.REQUEST_TRADE: _receive_request_trade,
    ActionType.ACCEPT_TRADE: _receive_accept_trade,
    ActionType.DONE_TRADING: _receive_done_trading,
    ActionType.END_TURN: _receive_end_turn,
}


def apply_action(state: GameState, action) -> GameState:
    """Apply one game action and return the next state.

    Senders validate before dispatching, so receptors trust the action and
    never raise; actions that make no sense here leave the state unchanged.
    """
    receptor = RECEPTORS.get(action.action_type)
    if receptor is None:
        logger.debug("no game receptor for %s", action.action_type.value)
        return state

    next_state = clone_state(state)
    previous_phase = next_state.phase
    receptor(next_state, action)
    if next_state.phase != previous_phase:
        logger.info("phase %s -> %s", previous_phase.value, next_state.phase.value)
    return next_state
