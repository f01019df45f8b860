import random

import pytest

from sc2kit.geometry import Point
from sc2kit.model import Alliance, Attribute, RawUnit, UnitOrder, UnitTypeData, Weapon
from sc2kit.unit_context import (
    AllianceUnits,
    FilteredUnits,
    NeutralUnits,
    SelfUnits,
    UnitContext,
    filter_to_mask,
    sort_key,
)

DRONE = 104
LARVA = 151
OVERLORD = 106
HATCHERY = 86
ZERGLING = 105
LAIR = 100
MINERAL_FIELD = 341
MINERAL_FIELD_750 = 483
VESPENE_GEYSER = 342
ROCK = 473
TRAIN_ZERGLING = 1343


def make_type_data():
    return {
        DRONE: UnitTypeData(unit_id=DRONE, weapons=[Weapon()]),
        LARVA: UnitTypeData(unit_id=LARVA),
        OVERLORD: UnitTypeData(unit_id=OVERLORD),
        HATCHERY: UnitTypeData(unit_id=HATCHERY, attributes=[Attribute.STRUCTURE]),
        ZERGLING: UnitTypeData(unit_id=ZERGLING, weapons=[Weapon()], ability_id=TRAIN_ZERGLING),
        LAIR: UnitTypeData(unit_id=LAIR, attributes=[Attribute.STRUCTURE], tech_alias=[HATCHERY]),
        MINERAL_FIELD: UnitTypeData(
            unit_id=MINERAL_FIELD, has_minerals=True, attributes=[Attribute.STRUCTURE]
        ),
        MINERAL_FIELD_750: UnitTypeData(
            unit_id=MINERAL_FIELD_750, has_minerals=True, attributes=[Attribute.STRUCTURE]
        ),
        VESPENE_GEYSER: UnitTypeData(
            unit_id=VESPENE_GEYSER, has_vespene=True, attributes=[Attribute.STRUCTURE]
        ),
        ROCK: UnitTypeData(unit_id=ROCK),
    }


def make_bench_units(seed=0):
    specs = []
    specs += [(DRONE, Alliance.SELF, False)] * 12
    specs += [(LARVA, Alliance.SELF, False)] * 3
    specs += [(OVERLORD, Alliance.SELF, True)] * 6
    specs += [(HATCHERY, Alliance.SELF, False)] * 2
    specs += [(ZERGLING, Alliance.SELF, False)] * 100
    specs += [(ZERGLING, Alliance.ENEMY, False)] * 100
    for _ in range(14):
        for _ in range(4):
            specs.append((MINERAL_FIELD, Alliance.NEUTRAL, False))
            specs.append((MINERAL_FIELD_750, Alliance.NEUTRAL, False))
        for _ in range(2):
            specs.append((VESPENE_GEYSER, Alliance.NEUTRAL, False))
    units = [
        RawUnit(tag=i + 1, unit_type=t, alliance=a, is_flying=f, pos=Point(float(i), 0.0, 0.0))
        for i, (t, a, f) in enumerate(specs)
    ]
    random.Random(seed).shuffle(units)
    return units


@pytest.fixture
def ctx():
    context = UnitContext()
    context.update(make_bench_units(), make_type_data())
    return context


@pytest.mark.parametrize(
    "unit_type, alliance, flying, expected",
    [
        (DRONE, Alliance.SELF, False, 0x03000068),
        (ZERGLING, Alliance.ENEMY, False, 0x13000069),
        (OVERLORD, Alliance.SELF, True, 0x0700006A),
        (HATCHERY, Alliance.SELF, False, 0x01000056),
        (LARVA, Alliance.SELF, False, 0x00000097),
        (MINERAL_FIELD, Alliance.NEUTRAL, False, 0x19000155),
        (VESPENE_GEYSER, Alliance.NEUTRAL, False, 0x1A000156),
        (ROCK, Alliance.NEUTRAL, False, 0x180001D9),
    ],
)
def test_sort_key_values(unit_type, alliance, flying, expected):
    raw = RawUnit(unit_type=unit_type, alliance=alliance, is_flying=flying)
    assert sort_key(raw, make_type_data()[unit_type]) == expected


def test_sort_key_rejects_unknown_alliance():
    with pytest.raises(ValueError):
        sort_key(RawUnit(unit_type=DRONE, alliance=Alliance.NIL), make_type_data()[DRONE])


T, F = True, False


@pytest.mark.parametrize(
    "bits, expected",
    [
        (0, (T, T, T, T, T, T, T, T, F)),
        (1, (F, F, F, F, T, T, T, T, F)),
        (2, (T, T, T, T, F, F, F, F, F)),
        (4, (F, F, T, T, T, T, F, F, F)),
        (8, (T, T, F, F, F, F, T, T, F)),
        (16, (T, F, F, T, T, F, F, T, F)),
        (32, (F, T, T, F, F, T, T, F, F)),
        (1 | 4 | 16, (F, F, F, F, T, F, F, F, F)),
        (1 | 2, (T, T, T, T, T, T, T, T, F)),
    ],
)
def test_filter_to_mask(bits, expected):
    assert filter_to_mask(bits) == expected


def test_counts_by_alliance(ctx):
    assert len(ctx.all_units()) == 363
    assert len(ctx.own.all()) == 123
    assert len(ctx.enemy.all()) == 100
    assert len(ctx.ally.all()) == 0
    assert ctx.own.count(DRONE) == 12
    assert len(ctx.own[LARVA]) == 3
    assert len(ctx.own[LAIR]) == 0
    assert len(ctx.enemy[ZERGLING]) == 100


def test_all_units_sorted(ctx):
    keys = [sort_key(u.raw, u.type_data) for u in ctx.all_units()]
    assert keys == sorted(keys)


def test_role_filters(ctx):
    flying = ctx.own.flying().all()
    assert len(flying) == 6
    assert {u.raw.unit_type for u in flying} == {OVERLORD}
    assert len(ctx.own.ground().can_attack().units().all()) == 112
    assert {u.raw.unit_type for u in ctx.own.structures().all()} == {HATCHERY}
    assert len(ctx.own.structures().all()) == 2
    assert len(ctx.own.passive().all()) == 11
    assert len(ctx.own.ground().passive().units().all()) == 3
    assert len(ctx.enemy.flying().all()) == 0
    assert len(ctx.enemy.can_attack().all()) == 100


def test_filtered_units_is_immutable(ctx):
    base = ctx.own.ground()
    narrowed = base.structures()
    assert isinstance(narrowed, FilteredUnits)
    assert len(base.all()) == 117
    assert len(narrowed.all()) == 2


def test_choose_and_first(ctx):
    chosen = ctx.own.choose(lambda u: u.raw.unit_type in (DRONE, ZERGLING)).choose(
        lambda u: u.raw.unit_type == DRONE
    )
    assert len(chosen.all()) == 12
    assert chosen.first().raw.unit_type == DRONE
    assert ctx.own.flying().first().raw.unit_type == OVERLORD
    assert ctx.enemy.flying().first().is_nil()
    assert ctx.own.choose(lambda u: u.raw.unit_type == HATCHERY).first().unit_type == HATCHERY


def test_neutral_groups(ctx):
    minerals = ctx.neutral.minerals()
    assert len(minerals) == 112
    assert {u.raw.unit_type for u in minerals} == {MINERAL_FIELD, MINERAL_FIELD_750}
    vespene = ctx.neutral.vespene()
    assert len(vespene) == 28
    assert {u.raw.unit_type for u in vespene} == {VESPENE_GEYSER}
    assert len(ctx.neutral.resources()) == 140
    assert len(ctx.neutral.all()) == 140
    assert len(ctx.neutral[MINERAL_FIELD]) == 56


def test_neutral_all_includes_other_neutrals():
    context = UnitContext()
    units = [
        RawUnit(tag=1, unit_type=ROCK, alliance=Alliance.NEUTRAL),
        RawUnit(tag=2, unit_type=MINERAL_FIELD, alliance=Alliance.NEUTRAL),
    ]
    context.update(units, make_type_data())
    assert [u.tag for u in context.neutral.all()] == [1, 2]
    assert [u.tag for u in context.neutral.resources()] == [2]


def test_lookup_by_tag(ctx):
    assert ctx.was_observed(1)
    assert ctx.unit_by_tag(1).tag == 1
    assert not ctx.was_observed(99999)
    assert ctx.unit_by_tag(99999).is_nil()


def test_units_carry_context(ctx):
    assert ctx.own[DRONE].ctx is ctx
    assert ctx.all_units().first().ctx is ctx


def test_abilities_are_attached():
    context = UnitContext()
    units = make_bench_units()
    context.update(units, make_type_data(), {u.tag: [3674, 1] for u in units})
    assert context.unit_by_tag(5).raw.actions == [3674, 1]


def test_missing_abilities_raise_and_keep_state(ctx):
    units = make_bench_units(seed=1)
    abilities = {u.tag: [1] for u in units[1:]}
    with pytest.raises(ValueError):
        ctx.update(units, make_type_data(), abilities)
    assert len(ctx.all_units()) == 363


def test_unknown_alliance_raises():
    context = UnitContext()
    with pytest.raises(ValueError):
        context.update([RawUnit(tag=1, unit_type=DRONE)], make_type_data())


def test_count_in_production_and_count_all(ctx):
    units = make_bench_units()
    larva = next(u for u in units if u.unit_type == LARVA)
    larva.orders = [UnitOrder(ability_id=TRAIN_ZERGLING)]
    context = UnitContext()
    context.update(units, make_type_data())
    assert context.own.count_in_production(ZERGLING) == 1
    assert context.own.count_all(ZERGLING) == 101
    assert context.own.count_in_production(DRONE) == 0


def test_count_in_production_unknown_type(ctx):
    with pytest.raises(KeyError):
        ctx.own.count_in_production(9999)


def test_count_if(ctx):
    assert ctx.own.count_if(lambda u: u.raw.unit_type == ZERGLING) == 100


def test_same_type_flying_and_ground():
    data = {200: UnitTypeData(unit_id=200)}
    units = [
        RawUnit(tag=1, unit_type=200, alliance=Alliance.SELF, is_flying=True),
        RawUnit(tag=2, unit_type=200, alliance=Alliance.SELF),
    ]
    context = UnitContext()
    context.update(units, data)
    assert sorted(u.tag for u in context.own[200]) == [1, 2]
    assert [u.tag for u in context.own.flying().all()] == [1]
    assert [u.tag for u in context.own.ground().all()] == [2]


def test_type_data_as_list():
    data = [None] * 400
    data[DRONE] = UnitTypeData(unit_id=DRONE, weapons=[Weapon()])
    data[HATCHERY] = UnitTypeData(unit_id=HATCHERY, attributes=[Attribute.STRUCTURE])
    units = [
        RawUnit(tag=1, unit_type=HATCHERY, alliance=Alliance.SELF),
        RawUnit(tag=2, unit_type=DRONE, alliance=Alliance.SELF),
    ]
    context = UnitContext()
    context.update(units, data)
    assert [u.tag for u in context.own.structures().all()] == [1]
    assert [u.tag for u in context.own.can_attack().all()] == [2]


def test_update_with_no_units_resets(ctx):
    ctx.update([], make_type_data())
    assert len(ctx.all_units()) == 0
    assert len(ctx.own.all()) == 0
    assert len(ctx.neutral.minerals()) == 0
    assert len(ctx.own[DRONE]) == 0
    assert not ctx.was_observed(1)


def test_alliance_views_types(ctx):
    assert isinstance(ctx.own, SelfUnits)
    assert isinstance(ctx.enemy, AllianceUnits)
    assert isinstance(ctx.neutral, NeutralUnits)
    assert DRONE in ctx.own
    assert sorted(ctx.enemy) == [ZERGLING]