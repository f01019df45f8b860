"""Per-observation index of units grouped by alliance, role and unit type."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from operator import itemgetter
from typing import Any, Optional

from sc2kit.model import Alliance, Attribute, RawUnit, UnitTypeData
from sc2kit.unit import Unit
from sc2kit.units import Predicate, Units

_ALLIANCE_INDEX = {
    Alliance.SELF: 0,
    Alliance.ALLY: 1,
    Alliance.ENEMY: 2,
    Alliance.NEUTRAL: 3,
}

# A sort key holds the alliance index in bits 27+, a 3-bit role group in
# bits 24-26 and the unit type in the low 24 bits.
_ALLIANCE_SHIFT = 27
_GROUP_SHIFT = 24
_TYPE_MASK = (1 << 24) - 1
_GROUP_COUNT = 28

_NEUTRAL_ALL = 24
_NEUTRAL_MINERALS = 25
_NEUTRAL_VESPENE = 26

_FLYING = 1 << 0
_GROUND = 1 << 1
_CAN_ATTACK = 1 << 2
_PASSIVE = 1 << 3
_UNITS = 1 << 4
_STRUCTURES = 1 << 5


def _alliance_index(alliance: Alliance) -> int:
    try:
        return _ALLIANCE_INDEX[alliance]
    except KeyError:
        raise ValueError(f"unsupported alliance: {alliance!r}") from None


def _lookup(type_data: Any, unit_type: int) -> Optional[UnitTypeData]:
    if type_data is None:
        return None
    try:
        return type_data[unit_type]
    except (KeyError, IndexError, TypeError):
        return None


def _type_data_values(type_data: Any) -> Iterator[UnitTypeData]:
    if type_data is None:
        return iter(())
    values = type_data.values() if isinstance(type_data, Mapping) else type_data
    return (d for d in values if d is not None)


def sort_key(raw: RawUnit, data: Optional[UnitTypeData]) -> int:
    """Key that orders units by alliance, then role group, then unit type.

    Groups for players: 0 ground passive units, 1 ground passive structures,
    2 ground attacking structures, 3 ground attacking units, 4 flying attacking
    units, 5 flying attacking structures, 6 flying passive structures,
    7 flying passive units. Neutral groups: 0 other, 1 minerals, 2 vespene.
    """
    if not 0 <= raw.unit_type <= _TYPE_MASK:
        raise ValueError(f"unit type out of range: {raw.unit_type}")
    index = _alliance_index(raw.alliance)
    if data is None:
        data = UnitTypeData()

    if raw.alliance == Alliance.NEUTRAL:
        group = 2 if data.has_vespene else 1 if data.has_minerals else 0
    else:
        group = 1 if Attribute.STRUCTURE in data.attributes else 0
        if data.weapons:
            group = 3 - group
        if raw.is_flying:
            group = 7 - group

    return (index << _ALLIANCE_SHIFT) | (group << _GROUP_SHIFT) | raw.unit_type


def filter_to_mask(bits: int) -> tuple[bool, ...]:
    """Which of the 8 role groups a set of filter bits selects (plus a closing False).

    Bits: 1 flying, 2 ground, 4 can attack, 8 passive, 16 units, 32 structures.
    A category with neither of its bits set selects both sides.
    """
    if not bits & (_FLYING | _GROUND):
        bits |= _FLYING | _GROUND
    if not bits & (_CAN_ATTACK | _PASSIVE):
        bits |= _CAN_ATTACK | _PASSIVE
    if not bits & (_UNITS | _STRUCTURES):
        bits |= _UNITS | _STRUCTURES

    excluded: set[int] = set()
    if not bits & _GROUND:
        excluded |= {0, 1, 2, 3}
    if not bits & _FLYING:
        excluded |= {4, 5, 6, 7}
    if not bits & _PASSIVE:
        excluded |= {0, 1, 6, 7}
    if not bits & _CAN_ATTACK:
        excluded |= {2, 3, 4, 5}
    if not bits & _UNITS:
        excluded |= {0, 3, 4, 7}
    if not bits & _STRUCTURES:
        excluded |= {1, 2, 5, 6}

    return tuple(i not in excluded for i in range(8)) + (False,)


@dataclass(frozen=True)
class FilteredUnits:
    """A selection of one alliance's units by role, with an optional predicate."""

    ctx: UnitContext = field(repr=False)
    alliance_index: int = 0
    bits: int = 0
    predicate: Optional[Predicate] = field(default=None, repr=False)

    def _with(self, bit: int) -> FilteredUnits:
        return replace(self, bits=self.bits | bit)

    def flying(self) -> FilteredUnits:
        return self._with(_FLYING)

    def ground(self) -> FilteredUnits:
        return self._with(_GROUND)

    def can_attack(self) -> FilteredUnits:
        return self._with(_CAN_ATTACK)

    def passive(self) -> FilteredUnits:
        return self._with(_PASSIVE)

    def units(self) -> FilteredUnits:
        return self._with(_UNITS)

    def structures(self) -> FilteredUnits:
        return self._with(_STRUCTURES)

    def choose(self, predicate: Predicate) -> FilteredUnits:
        """Further restrict the selection to units for which predicate is true."""
        prev = self.predicate
        if prev is None:
            combined = predicate
        else:
            def combined(u: Unit) -> bool:
                return prev(u) and predicate(u)
        return replace(self, predicate=combined)

    def _selected(self) -> Iterator[Unit]:
        base = 8 * self.alliance_index
        for i, included in enumerate(filter_to_mask(self.bits)[:8]):
            if included:
                yield from self.ctx._span(base + i, 1)

    def _matching(self) -> Iterator[Unit]:
        if self.predicate is None:
            return self._selected()
        return (u for u in self._selected() if self.predicate(u))

    def all(self) -> Units:
        """All selected units."""
        return Units(list(self._matching()))

    def first(self) -> Unit:
        """The first selected unit, or a nil unit."""
        return next(self._matching(), Unit())


class _TypedUnits:
    """Units of one alliance indexed by unit type; missing types give empty Units."""

    def __init__(self, ctx: UnitContext, alliance: Alliance) -> None:
        self._ctx = ctx
        self._alliance_index = _alliance_index(alliance)
        self._by_type: dict[int, list[Unit]] = {}

    def _reset(self, by_type: dict[int, list[Unit]]) -> None:
        self._by_type = by_type

    def __getitem__(self, unit_type: int) -> Units:
        return Units(self._by_type.get(unit_type, []))

    def __contains__(self, unit_type: object) -> bool:
        return unit_type in self._by_type

    def __iter__(self) -> Iterator[int]:
        return iter(self._by_type)

    def __len__(self) -> int:
        return len(self._by_type)


class AllianceUnits(_TypedUnits):
    """Units of a player alliance, by type and by role."""

    def _filter(self) -> FilteredUnits:
        return FilteredUnits(self._ctx, self._alliance_index)

    def flying(self) -> FilteredUnits:
        return self._filter().flying()

    def ground(self) -> FilteredUnits:
        return self._filter().ground()

    def can_attack(self) -> FilteredUnits:
        return self._filter().can_attack()

    def passive(self) -> FilteredUnits:
        return self._filter().passive()

    def units(self) -> FilteredUnits:
        return self._filter().units()

    def structures(self) -> FilteredUnits:
        return self._filter().structures()

    def choose(self, predicate: Predicate) -> FilteredUnits:
        return self._filter().choose(predicate)

    def all(self) -> Units:
        return self._filter().all()

    def first(self) -> Unit:
        return self._filter().first()


class SelfUnits(AllianceUnits):
    """The controlled player's units, with counting helpers."""

    def __init__(self, ctx: UnitContext) -> None:
        super().__init__(ctx, Alliance.SELF)

    def tech_alias(self, unit_type: int) -> Units:
        """Units of the type plus units of every type that counts as it for tech."""
        units = Units(list(self[unit_type]))
        for data in _type_data_values(self._ctx._type_data):
            if unit_type in data.tech_alias:
                units.concat(self[data.unit_id])
        return units

    def count(self, unit_type: int) -> int:
        return len(self[unit_type])

    def count_in_production(self, unit_type: int) -> int:
        """Number of queued orders that produce the given unit type."""
        data = _lookup(self._ctx._type_data, unit_type)
        if data is None:
            raise KeyError(f"no type data for unit type {unit_type}")
        ability = data.ability_id
        return sum(
            1
            for u in self.all()
            for order in u.raw.orders
            if order.ability_id == ability
        )

    def count_all(self, unit_type: int) -> int:
        return self.count(unit_type) + self.count_in_production(unit_type)

    def count_if(self, predicate: Predicate) -> int:
        return sum(1 for u in self.all() if predicate(u))


class NeutralUnits(_TypedUnits):
    """Neutral units, by type and by resource kind."""

    def __init__(self, ctx: UnitContext) -> None:
        super().__init__(ctx, Alliance.NEUTRAL)

    def minerals(self) -> Units:
        return Units(self._ctx._span(_NEUTRAL_MINERALS, 1))

    def vespene(self) -> Units:
        return Units(self._ctx._span(_NEUTRAL_VESPENE, 1))

    def resources(self) -> Units:
        return Units(self._ctx._span(_NEUTRAL_MINERALS, 2))

    def all(self) -> Units:
        return Units(self._ctx._span(_NEUTRAL_ALL, 3))


class UnitContext:
    """Units of the latest observation, sorted and grouped for quick filtered access."""

    def __init__(self) -> None:
        self._type_data: Any = None
        self._wrapped: list[Unit] = []
        self._by_tag: dict[int, Unit] = {}
        self._groups: list[int] = [0] * _GROUP_COUNT
        self.own = SelfUnits(self)
        self.ally = AllianceUnits(self, Alliance.ALLY)
        self.enemy = AllianceUnits(self, Alliance.ENEMY)
        self.neutral = NeutralUnits(self)

    def _span(self, start: int, length: int) -> list[Unit]:
        return self._wrapped[self._groups[start]:self._groups[start + length]]

    def update(
        self,
        raw_units: Iterable[RawUnit],
        type_data: Any,
        abilities: Optional[Mapping[int, Iterable[int]]] = None,
    ) -> None:
        """Load a new observation.

        `type_data` maps unit type ids to UnitTypeData (a mapping or a list
        indexed by id). `abilities`, if given, maps each unit tag to the ability
        ids it can use now; every unit must have an entry.
        """
        raw_list = list(raw_units)
        if abilities is not None:
            missing = [u.tag for u in raw_list if u.tag not in abilities]
            if missing:
                raise ValueError(
                    f"missing ability responses, expected: {len(raw_list)} "
                    f"got: {len(raw_list) - len(missing)}"
                )

        keyed = sorted(
            ((sort_key(u, _lookup(type_data, u.unit_type)), u) for u in raw_list),
            key=itemgetter(0),
        )

        wrapped: list[Unit] = []
        by_tag: dict[int, Unit] = {}
        by_alliance: list[dict[int, list[Unit]]] = [{} for _ in range(4)]
        for key, raw in keyed:
            if abilities is not None:
                raw.actions = list(abilities[raw.tag])
            unit = Unit(raw, _lookup(type_data, raw.unit_type), self)
            wrapped.append(unit)
            by_tag[raw.tag] = unit
            by_alliance[key >> _ALLIANCE_SHIFT].setdefault(raw.unit_type, []).append(unit)

        group_ids = [key >> _GROUP_SHIFT for key, _ in keyed]

        self._type_data = type_data
        self._wrapped = wrapped
        self._by_tag = by_tag
        self._groups = [bisect_left(group_ids, g) for g in range(_GROUP_COUNT)]
        for typed, by_type in zip((self.own, self.ally, self.enemy, self.neutral), by_alliance):
            typed._reset(by_type)

    def was_observed(self, tag: int) -> bool:
        """True if a unit with this tag was in the last observation."""
        return tag in self._by_tag

    def unit_by_tag(self, tag: int) -> Unit:
        """The unit with this tag from the last observation, or a nil unit."""
        return self._by_tag.get(tag, Unit())

    def all_units(self) -> Units:
        """All units of the last observation in sorted order."""
        return Units(self._wrapped)