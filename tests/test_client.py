from settlers.client import GameClient, InputEvents
from settlers.engine.board import starter_board
from settlers.engine.game_state import OrderEntry, TurnPhase, initial_game_state
from settlers.engine.placement import PlacementMode
from settlers.engine.rules import Item
from settlers.engine.types import (
    CornerCoord,
    CornerDirection,
    EdgeCoord,
    EdgeDirection,
    PlayerColor,
    ResourceType,
    Structure,
    StructureType,
)
from settlers.session import GameSession

RED, BLUE = PlayerColor.RED, PlayerColor.BLUE


def _client(resources, *structures):
    session = GameSession("u1")
    state = initial_game_state(starter_board(), ["u1", "u2"])
    state.player_colors = {RED: "u1", BLUE: "u2"}
    state.player_order = [OrderEntry(RED, 9), OrderEntry(BLUE, 4)]
    state.current_player = RED
    state.phase = TurnPhase.BUILD
    state.resources = {RED: dict(resources)}
    state.structures = list(structures)
    session.game = state
    return GameClient(session)


def test_purchase_road_then_place_it():
    client = _client(
        {ResourceType.LUMBER: 1, ResourceType.BRICK: 1},
        Structure(RED, StructureType.SETTLEMENT, CornerCoord(0, 1, CornerDirection.N)),
    )
    assert client.purchase(Item.ROAD)
    assert client.placement.active == [PlacementMode.ROAD]
    assert client.session.game.resources[RED] == {ResourceType.LUMBER: 0, ResourceType.BRICK: 0}
    assert not client.purchase(Item.ROAD)

    edge = EdgeCoord(0, 0, EdgeDirection.E)
    client.tick(InputEvents(click_released=True, hovered=edge))
    assert client.session.game.structures[-1] == Structure(RED, StructureType.ROAD, edge)
    assert client.placement.active == []


def test_purchase_city_upgrades_hovered_settlement():
    corner = CornerCoord(0, 0, CornerDirection.N)
    client = _client(
        {ResourceType.GRAIN: 2, ResourceType.ORE: 3},
        Structure(RED, StructureType.SETTLEMENT, corner),
    )
    assert client.purchase(Item.CITY)
    client.tick(InputEvents(click_released=True, hovered=corner))
    assert client.session.game.structures == [Structure(RED, StructureType.CITY, corner)]


def test_hovering_an_illegal_slot_places_nothing():
    client = _client({ResourceType.LUMBER: 1, ResourceType.BRICK: 1})
    client.purchase(Item.ROAD)
    client.tick(InputEvents(click_released=True, hovered=EdgeCoord(0, 0, EdgeDirection.E)))
    assert client.session.game.structures == []
    assert client.placement.active == [PlacementMode.ROAD]


def test_end_turn_hands_over_and_clears_placement():
    client = _client({ResourceType.LUMBER: 1, ResourceType.BRICK: 1})
    client.purchase(Item.ROAD)
    assert client.end_turn()
    assert client.placement.active == []
    assert client.session.game.current_player == BLUE
    assert not client.purchase(Item.ROAD)
