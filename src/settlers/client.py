"""Per-tick local controller: turns input events into dispatched actions.

The input collaborator reports, once per tick, whether the confirm key went
down, whether the primary click was released and which placement slot is under
the pointer. Nothing here mutates game state directly; everything goes through
:meth:`GameSession.dispatch`.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from settlers.engine.actions import (
    BuildCity,
    BuildRoad,
    BuildSettlement,
    ChooseColor,
    DoneTrading,
    EndTurn,
    JoinGame,
    PlayersReady,
    PurchaseItem,
    RollForOrder,
)
from settlers.engine.game_state import SETUP_BUILD_PHASES, TurnPhase
from settlers.engine.placement import (
    PlacementMode,
    PlacementState,
    get_valid_selected_helper,
    setup_placement_mode,
)
from settlers.engine.rules import COSTS, Item, can_afford, roll_dice, roll_for_resources
from settlers.engine.types import PLAYER_COLORS, CornerCoord, PlayerColor, StructureCoord, StructureType
from settlers.session import GameSession

logger = logging.getLogger(__name__)

MODE_BY_ITEM = {
    Item.ROAD: PlacementMode.ROAD,
    Item.SETTLEMENT: PlacementMode.SETTLEMENT,
    Item.CITY: PlacementMode.CITY,
}


@dataclass(frozen=True)
class InputEvents:
    confirm_pressed: bool = False
    click_released: bool = False
    hovered: Optional[StructureCoord] = None


class GameClient:
    def __init__(self, session: GameSession, rng: random.Random | None = None):
        self.session = session
        self.rng = rng or random.Random()
        self.placement = PlacementState()
        session.subscribe(self._on_state_change)

    @property
    def my_color(self) -> Optional[PlayerColor]:
        game = self.session.game
        return game.color_of(self.session.user_id) if game else None

    @property
    def is_current_player(self) -> bool:
        game = self.session.game
        return game is not None and game.is_current_player(self.session.user_id)

    def join(self) -> None:
        roster = self.session.roster
        if roster.players_ready or self.session.user_id in roster.players:
            return
        self.session.dispatch(JoinGame(user_id=self.session.user_id))

    def tick(self, events: InputEvents) -> None:
        game = self.session.game
        if game is None:
            if events.confirm_pressed and self.session.roster.can_start:
                self.session.dispatch(PlayersReady())
            return

        if game.phase == TurnPhase.CHOOSE_COLORS:
            if events.confirm_pressed:
                self.choose_color()
            return
        if game.phase == TurnPhase.SETUP_ROLL:
            if events.confirm_pressed:
                self.roll_for_order()
            return

        self.placement.selected = get_valid_selected_helper(
            game, self.placement, events.hovered, self.session.user_id
        )
        if not self.is_current_player:
            return

        if game.phase in SETUP_BUILD_PHASES or game.phase == TurnPhase.BUILD:
            if events.click_released:
                self.place_structure()
            return
        if game.phase == TurnPhase.ROLL:
            if events.confirm_pressed:
                self.session.dispatch(roll_for_resources(game, rng=self.rng))
            return
        if game.phase == TurnPhase.TRADE:
            if events.confirm_pressed:
                self.session.dispatch(DoneTrading(player=self.my_color))

    def choose_color(self) -> None:
        game = self.session.game
        if game is None or self.my_color is not None:
            return
        free = next((color for color in PLAYER_COLORS if color not in game.player_colors), None)
        if free is not None:
            self.session.dispatch(ChooseColor(user_id=self.session.user_id, color=free))

    def roll_for_order(self) -> None:
        color = self.my_color
        game = self.session.game
        if color is None or game.has_rolled_for_order(color):
            return
        roll = roll_dice(self.rng)
        logger.info("%s rolled %d for turn order", color.value, sum(roll))
        self.session.dispatch(RollForOrder(player=color, roll=roll))

    def place_structure(self) -> None:
        game = self.session.game
        coords = self.placement.selected
        if game is None or coords is None or not self.placement.active:
            return
        player = game.current_player
        if isinstance(coords, CornerCoord):
            existing = game.board_state.structure_at(coords)
            if existing is not None and existing.structure_type == StructureType.SETTLEMENT:
                self.placement.consume(PlacementMode.CITY)
                self.session.dispatch(BuildCity(player=player, coords=coords))
            else:
                self.placement.consume(PlacementMode.SETTLEMENT)
                self.session.dispatch(BuildSettlement(player=player, coords=coords))
        else:
            self.placement.consume(PlacementMode.ROAD)
            self.session.dispatch(BuildRoad(player=player, coords=coords))
        self.placement.selected = None

    def purchase(self, item: Item) -> bool:
        game = self.session.game
        if game is None or not self.is_current_player or game.phase != TurnPhase.BUILD:
            return False
        cost = COSTS[item]
        if not can_afford(game.resources.get(game.current_player), cost):
            return False
        self.session.dispatch(PurchaseItem(player=game.current_player, cost=dict(cost)))
        if item in MODE_BY_ITEM:
            self.placement.activate(MODE_BY_ITEM[item])
        return True

    def end_turn(self) -> bool:
        game = self.session.game
        if game is None or not self.is_current_player or game.phase != TurnPhase.BUILD:
            return False
        self.placement.reset()
        self.session.dispatch(EndTurn(player=self.my_color))
        return True

    def _on_state_change(self, session: GameSession) -> None:
        game = session.game
        if game is None or game.phase not in SETUP_BUILD_PHASES:
            if game is not None and game.phase == TurnPhase.ROLL:
                self.placement.reset()
            return
        if game.is_current_player(session.user_id):
            self.placement.reset([setup_placement_mode(game, game.current_player)])
        else:
            self.placement.reset()
