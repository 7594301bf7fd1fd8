from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Union


class ResourceType(str, Enum):
    BRICK = "brick"
    LUMBER = "lumber"
    ORE = "ore"
    GRAIN = "grain"
    WOOL = "wool"


class TerrainType(str, Enum):
    HILLS = "hills"
    FOREST = "forest"
    MOUNTAINS = "mountains"
    FIELDS = "fields"
    PASTURE = "pasture"
    DESERT = "desert"


RESOURCE_BY_TERRAIN: Dict[TerrainType, ResourceType | None] = {
    TerrainType.HILLS: ResourceType.BRICK,
    TerrainType.FOREST: ResourceType.LUMBER,
    TerrainType.MOUNTAINS: ResourceType.ORE,
    TerrainType.FIELDS: ResourceType.GRAIN,
    TerrainType.PASTURE: ResourceType.WOOL,
    TerrainType.DESERT: None,
}


class PlayerColor(str, Enum):
    RED = "red"
    BLUE = "blue"
    WHITE = "white"
    ORANGE = "orange"


PLAYER_COLORS = (PlayerColor.RED, PlayerColor.BLUE, PlayerColor.WHITE, PlayerColor.ORANGE)


class StructureType(str, Enum):
    SETTLEMENT = "settlement"
    CITY = "city"
    ROAD = "road"


class CornerDirection(str, Enum):
    N = "N"
    S = "S"


class EdgeDirection(str, Enum):
    E = "E"
    SE = "SE"
    SW = "SW"


class Hex(NamedTuple):
    """Axial hex coordinate; the cube ``s`` component is implicit."""

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r


@dataclass(frozen=True)
class CornerCoord:
    q: int
    r: int
    direction: CornerDirection

    @property
    def hex(self) -> Hex:
        return Hex(self.q, self.r)

    def to_dict(self) -> Dict[str, object]:
        return {"q": self.q, "r": self.r, "direction": self.direction.value}


@dataclass(frozen=True)
class EdgeCoord:
    q: int
    r: int
    direction: EdgeDirection

    @property
    def hex(self) -> Hex:
        return Hex(self.q, self.r)

    def to_dict(self) -> Dict[str, object]:
        return {"q": self.q, "r": self.r, "direction": self.direction.value}


StructureCoord = Union[CornerCoord, EdgeCoord]


@dataclass(frozen=True)
class Tile:
    hex: Hex
    terrain: TerrainType
    number: int | None

    @property
    def resource(self) -> ResourceType | None:
        return RESOURCE_BY_TERRAIN[self.terrain]


@dataclass(frozen=True)
class Structure:
    player: PlayerColor
    structure_type: StructureType
    coords: StructureCoord

    @property
    def is_road(self) -> bool:
        return self.structure_type == StructureType.ROAD

    def to_dict(self) -> Dict[str, object]:
        return {
            "player": self.player.value,
            "type": self.structure_type.value,
            "coords": self.coords.to_dict(),
        }


ResourceBank = Dict[ResourceType, int]
