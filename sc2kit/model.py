"""Identifier types, enumerations and plain records describing units."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NewType, Optional

from sc2kit.geometry import Point

AbilityID = NewType("AbilityID", int)
BuffID = NewType("BuffID", int)
EffectID = NewType("EffectID", int)
UnitTypeID = NewType("UnitTypeID", int)
UpgradeID = NewType("UpgradeID", int)
PlayerID = NewType("PlayerID", int)
UnitTag = NewType("UnitTag", int)


class Alliance(IntEnum):
    NIL = 0
    SELF = 1
    ALLY = 2
    NEUTRAL = 3
    ENEMY = 4


class Attribute(IntEnum):
    NIL = 0
    LIGHT = 1
    ARMORED = 2
    BIOLOGICAL = 3
    MECHANICAL = 4
    ROBOTIC = 5
    PSIONIC = 6
    MASSIVE = 7
    STRUCTURE = 8
    HOVER = 9
    HEROIC = 10
    SUMMONED = 11


class DisplayType(IntEnum):
    NIL = 0
    VISIBLE = 1
    SNAPSHOT = 2
    HIDDEN = 3
    PLACEHOLDER = 4


class WeaponTargetType(IntEnum):
    NIL = 0
    GROUND = 1
    AIR = 2
    ANY = 3


@dataclass
class Weapon:
    """One weapon of a unit type."""

    type: WeaponTargetType = WeaponTargetType.NIL
    damage: float = 0.0
    attacks: int = 0
    range: float = 0.0
    speed: float = 0.0

    def __post_init__(self) -> None:
        self.type = WeaponTargetType(self.type)


@dataclass
class UnitOrder:
    """A queued order; at most one of the two targets is set."""

    ability_id: int = 0
    target_unit_tag: int = 0
    target_world_space_pos: Optional[Point] = None
    progress: float = 0.0


@dataclass
class UnitTypeData:
    """Static description of a unit type."""

    unit_id: int = 0
    name: str = ""
    available: bool = False
    cargo_size: int = 0
    mineral_cost: int = 0
    vespene_cost: int = 0
    food_required: float = 0.0
    food_provided: float = 0.0
    ability_id: int = 0
    race: int = 0
    build_time: float = 0.0
    has_vespene: bool = False
    has_minerals: bool = False
    sight_range: float = 0.0
    tech_alias: list[int] = field(default_factory=list)
    unit_alias: int = 0
    tech_requirement: int = 0
    require_attached: bool = False
    attributes: list[Attribute] = field(default_factory=list)
    movement_speed: float = 0.0
    armor: float = 0.0
    weapons: list[Weapon] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.attributes = [Attribute(a) for a in self.attributes]


@dataclass
class RawUnit:
    """A unit as seen in one observation; `actions` holds its available ability ids."""

    tag: int = 0
    unit_type: int = 0
    alliance: Alliance = Alliance.NIL
    display_type: DisplayType = DisplayType.NIL
    owner: int = 0
    pos: Point = field(default_factory=Point)
    facing: float = 0.0
    radius: float = 0.0
    build_progress: float = 0.0
    health: float = 0.0
    health_max: float = 0.0
    shield: float = 0.0
    shield_max: float = 0.0
    energy: float = 0.0
    energy_max: float = 0.0
    mineral_contents: int = 0
    vespene_contents: int = 0
    is_flying: bool = False
    is_burrowed: bool = False
    is_hallucination: bool = False
    orders: list[UnitOrder] = field(default_factory=list)
    buff_ids: list[int] = field(default_factory=list)
    add_on_tag: int = 0
    assigned_harvesters: int = 0
    ideal_harvesters: int = 0
    weapon_cooldown: float = 0.0
    engaged_target_tag: int = 0
    actions: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.alliance = Alliance(self.alliance)
        self.display_type = DisplayType(self.display_type)