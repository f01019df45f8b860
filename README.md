# sc2kit

Building blocks for writing bots for a real-time strategy game. The package
provides points and vectors, typed views over packed image grids, and the
bookkeeping that turns a raw list of observed units into groups you can filter
quickly.

It uses only the standard library and needs Python 3.10 or newer.

## Installation

```
pip install .
```

To install pytest as well, add the `test` extra:

```
pip install ".[test]"
```

## Modules

- `sc2kit.geometry` has the point types `PointI`, `Point2D` and `Point` and the
  vector types `VecI`, `Vec2D` and `Vec`, all frozen dataclasses. They offer:
  - plain, squared and Manhattan distances (`distance`, `distance2`, `manhattan`);
  - `vec_to` and `dir_to`;
  - `offset`, which moves a point toward a target;
  - `offset4_by` and `offset8_by`, the 4- and 8-neighbourhoods;
  - `dot`, `cross`, `norm` and `length`;
  - `Vec2D.quadrant(n)`, which snaps a direction to the nearest n-th of a circle.

  The vectors also support the `+`, `-`, unary `-` and `*` operators, and the
  real ones support `/`.
- `sc2kit.image` has `ImageData` (bits per pixel, a `Size2DI` and the packed
  bytes). It also has three typed views:
  - `ImageDataBits`: 1 bit per pixel, most significant bit first.
  - `ImageDataBytes`: 8 bits per pixel.
  - `ImageDataInt32`: signed 32-bit little-endian values.

  `ImageData.bits()`, `.bytes()` and `.ints()` return a view that shares the
  bytes. They raise `ValueError` when the bits per pixel do not match. A read
  outside the image returns `False` or `0`, and a write outside it is ignored.
  `ImageDataBits.to_bytes()` expands set bits to 255.
- `sc2kit.model` has id type aliases and the enums `Alliance`, `Attribute`,
  `DisplayType` and `WeaponTargetType`. It also has plain records: `RawUnit`
  and `UnitOrder` for observed units, and `UnitTypeData` and `Weapon` for the
  unit type table.
- `sc2kit.player` has `Cost` and `Player`. `Player` tracks minerals, vespene
  and food. `can_afford` and `spend` let you plan several purchases within one
  step. `food_left` is the room under the food cap; it is negative when the
  player is over the cap.
- `sc2kit.unit` has `Unit`, which joins a `RawUnit` with its `UnitTypeData`.
  You can read the fields of either one directly from it, for example
  `unit.tag` or `unit.food_required`. It answers:
  - `is_idle`, `is_built`, `is_started`, `is_structure`;
  - `has_buff`, `has_energy`;
  - weapon damage and range;
  - `is_in_weapons_range`.

  A `Unit()` with no raw part is the "nil" unit, which lookups return when they
  find nothing.
- `sc2kit.units` has `Units`, an iterable collection that filters lazily. It
  offers:
  - `choose`, `drop` and `partition`;
  - `first`, `closest_to`, `closer_than` and `center`;
  - `tags`, `tagged` and `not_tagged`;
  - `has_energy`, `has_buff` and `no_buff`;
  - `is_started`, `is_built` and `is_idle`;
  - `each`, `each_while` and `each_until`;
  - `cache`, `slice` and `concat`.
- `sc2kit.unit_context` has `UnitContext`, which sorts one observation into
  groups. The groups are split by alliance, by flying or ground, by armed or
  passive, and by unit or structure. Its attributes are:
  - `own` (`SelfUnits`), with counting helpers such as `count`,
    `count_in_production`, `count_all`, `count_if` and `tech_alias`;
  - `ally` and `enemy` (`AllianceUnits`);
  - `neutral` (`NeutralUnits`), with `minerals`, `vespene`, `resources` and
    `all`.

  Each attribute can also be indexed by unit type id. Role filters return
  `FilteredUnits`. The module also exports `sort_key` and `filter_to_mask`,
  which define the grouping.

## Examples

```python
from sc2kit.geometry import Point2D, PointI

a = Point2D(1.0, 1.0)
b = Point2D(4.0, 5.0)
print(a.distance(b))          # 5.0
print(a.offset(b, 2.5))       # the point 2.5 units from a toward b

cell = PointI(3, 7)
print(cell.to_point2d_centered())   # Point2D(x=3.5, y=7.5)
print(cell.offset4_by(1))           # up, right, down and left neighbours
```

```python
from sc2kit.image import ImageDataBits

grid = ImageDataBits(8, 8)
grid.set(2, 3, True)
assert grid.get(2, 3)
assert not grid.get(100, 100)   # reads outside the image are False
as_bytes = grid.to_bytes()      # set bits become 255
```

After each observation, call `UnitContext.update` with three arguments:

- the raw units;
- the unit type table, either a mapping or a list indexed by type id;
- optionally, a mapping from each unit tag to the ability ids it can use now.

Every unit must have an entry in that mapping, or `update` raises `ValueError`.

```python
from sc2kit.geometry import Point
from sc2kit.model import Alliance, RawUnit, UnitTypeData, Weapon
from sc2kit.unit_context import UnitContext

DRONE = 104
type_data = {DRONE: UnitTypeData(unit_id=DRONE, weapons=[Weapon(type=1, damage=5, range=0.1)])}
raw_units = [RawUnit(tag=1, unit_type=DRONE, alliance=Alliance.SELF, pos=Point(10, 10))]

ctx = UnitContext()
ctx.update(raw_units, type_data, {1: [16]})

army = ctx.own.ground().can_attack().units().all()
workers = ctx.own.count(DRONE)
minerals = ctx.neutral.minerals()
target = ctx.enemy.flying().first()     # a nil Unit when there is none
```

## What this package does not do

The package does not connect to a game, send actions or queries, or run a bot
loop. It works only on the data you pass to it: observed units, unit type data,
abilities and images. Getting that data from a running game and acting on the
results is left to the caller.

## Running the tests

```
pytest
```