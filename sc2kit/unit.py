"""A unit from an observation combined with the static data of its type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from sc2kit.geometry import Point2D
from sc2kit.model import Attribute, DisplayType, RawUnit, UnitTypeData, WeaponTargetType

_OWN_FIELDS = frozenset({"raw", "type_data", "ctx"})


@dataclass(frozen=True)
class Unit:
    """Observed unit plus its type data.

    Fields of the raw unit and of the type data can be read directly from the
    wrapper (``unit.tag``, ``unit.food_required``); the raw unit wins on a clash.
    A unit with no raw part is the "nil" unit returned when nothing was found.
    """

    raw: Optional[RawUnit] = None
    type_data: Optional[UnitTypeData] = None
    ctx: Any = field(default=None, repr=False, compare=False)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name in _OWN_FIELDS:
            raise AttributeError(name)
        for source in (self.raw, self.type_data):
            if source is not None and hasattr(source, name):
                return getattr(source, name)
        raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")

    def is_nil(self) -> bool:
        return self.raw is None

    def _display_is(self, display: DisplayType) -> bool:
        return self.raw is not None and self.raw.display_type == display

    def is_visible(self) -> bool:
        return self._display_is(DisplayType.VISIBLE)

    def is_snapshot(self) -> bool:
        return self._display_is(DisplayType.SNAPSHOT)

    def is_hidden(self) -> bool:
        return self._display_is(DisplayType.HIDDEN)

    def has_attribute(self, attr: Attribute) -> bool:
        if self.raw is None or self.type_data is None:
            return False
        return attr in self.type_data.attributes

    def is_structure(self) -> bool:
        return self.has_attribute(Attribute.STRUCTURE)

    def pos2d(self) -> Point2D:
        """The x/y location of the unit."""
        return self.raw.pos.to_point2d()

    def is_started(self) -> bool:
        """True once construction has begun (not a ghost placement)."""
        return self.raw is not None and self.raw.build_progress > 0

    def is_built(self) -> bool:
        return self.raw is not None and self.raw.build_progress == 1

    def is_idle(self) -> bool:
        return self.raw is not None and not self.raw.orders

    def has_buff(self, buff_id: int) -> bool:
        return self.raw is not None and buff_id in self.raw.buff_ids

    def has_energy(self, energy: float) -> bool:
        return self.raw is not None and self.raw.energy >= energy

    def _weapons(self):
        return self.type_data.weapons if self.type_data is not None else []

    def _max_damage(self, target_type: WeaponTargetType) -> float:
        return max(
            (
                w.damage
                for w in self._weapons()
                if w.type in (target_type, WeaponTargetType.ANY)
            ),
            default=0.0,
        ) if any(True for _ in self._weapons()) else 0.0

    def ground_weapon_damage(self) -> float:
        """Damage per shot against ground targets."""
        return max(0.0, self._max_damage(WeaponTargetType.GROUND))

    def air_weapon_damage(self) -> float:
        """Damage per shot against air targets."""
        return max(0.0, self._max_damage(WeaponTargetType.AIR))

    def weapon_damage(self, target: Unit) -> float:
        """Damage per shot against the given target."""
        if target.raw is not None and target.raw.is_flying:
            return self.air_weapon_damage()
        return self.ground_weapon_damage()

    def weapon_range(self, target: Unit) -> float:
        """Longest range this unit can attack the target from; negative if it cannot."""
        if target.is_nil():
            return -1.0
        target_type = WeaponTargetType.AIR if target.raw.is_flying else WeaponTargetType.GROUND
        max_range = -1.0
        for weapon in self._weapons():
            if weapon.type in (target_type, WeaponTargetType.ANY):
                if weapon.damage > 0 and weapon.range > max_range:
                    max_range = weapon.range
        return max_range

    def is_in_weapons_range(self, target: Unit, gap: float) -> bool:
        """True if the target is within weapons range, allowing an extra `gap`."""
        if self.raw is None:
            return False
        max_range = self.weapon_range(target)
        if max_range < 0:
            return False
        dist = self.pos2d().distance(target.pos2d())
        return dist - gap <= max_range + self.raw.radius + target.raw.radius