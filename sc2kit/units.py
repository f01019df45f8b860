"""Lazily filtered collections of units."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Optional

from sc2kit.geometry import Point2D, Vec2D
from sc2kit.unit import Unit

Predicate = Callable[[Unit], bool]


class Units:
    """A sequence of units with an optional filter applied on access."""

    __slots__ = ("_units", "_predicate")

    def __init__(self, units: Iterable[Unit] = (), predicate: Optional[Predicate] = None) -> None:
        self._units: list[Unit] = units if isinstance(units, list) else list(units)
        self._predicate = predicate

    def __iter__(self) -> Iterator[Unit]:
        if self._predicate is None:
            return iter(self._units)
        return (u for u in self._units if self._predicate(u))

    def __len__(self) -> int:
        if self._predicate is None:
            return len(self._units)
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Units({self.tags()!r})"

    @property
    def ctx(self) -> Any:
        """The context the underlying units belong to, if any."""
        return self._units[0].ctx if self._units else None

    def cache(self) -> Units:
        """Apply any filter and return a collection owning its own list."""
        return Units(list(self))

    def slice(self) -> list[Unit]:
        """The filtered units as a new list."""
        return list(self)

    def concat(self, other: Units) -> None:
        """Append the units of `other` to this collection in place."""
        if not self._units:
            self._units, self._predicate = other._units, other._predicate
            return
        self._units = [*self, *other]
        self._predicate = None

    def tags(self) -> list[int]:
        return [u.tag for u in self]

    def each(self, f: Callable[[Unit], Any]) -> None:
        for u in self:
            f(u)

    def each_while(self, f: Predicate) -> bool:
        """Call f until it returns False; return False on early stop, else True."""
        return all(f(u) for u in self)

    def each_until(self, f: Predicate) -> bool:
        """Call f until it returns True; return True on early stop, else False."""
        return any(f(u) for u in self)

    def choose(self, predicate: Predicate) -> Units:
        """Units for which predicate is true."""
        if not self._units:
            return self
        prev = self._predicate
        if prev is None:
            return Units(self._units, predicate)
        return Units(self._units, lambda u: prev(u) and predicate(u))

    def partition(self, predicate: Predicate) -> tuple[Units, Units]:
        """Split into (chosen, dropped) by predicate."""
        chosen: list[Unit] = []
        dropped: list[Unit] = []
        for u in self:
            (chosen if predicate(u) else dropped).append(u)
        return Units(chosen), Units(dropped)

    def drop(self, predicate: Predicate) -> Units:
        """Units for which predicate is false."""
        return self.choose(lambda u: not predicate(u))

    def first(self) -> Unit:
        """The first unit, or a nil unit if there is none."""
        return next(iter(self), Unit())

    def closest_to(self, pos: Point2D) -> Unit:
        """The unit nearest to pos, or a nil unit if there is none."""
        closest, best = Unit(), float("inf")
        for u in self:
            dist = pos.distance2(u.pos2d())
            if dist < best:
                closest, best = u, dist
        return closest

    def closer_than(self, dist: float, pos: Point2D) -> Units:
        """Units at most dist away from pos."""
        dist2 = dist * dist
        return self.choose(lambda u: u.pos2d().distance2(pos) <= dist2)

    def center(self) -> Point2D:
        """Average location of the units; the origin if there are none."""
        total, n = Vec2D(), 0
        for u in self:
            p = u.pos2d()
            total = total.add(Vec2D(p.x, p.y))
            n += 1
        if n == 0:
            return Point2D()
        mean = total.div(n)
        return Point2D(mean.x, mean.y)

    @staticmethod
    def _is_tagged(tags, tag: int) -> bool:
        if isinstance(tags, Mapping):
            return bool(tags.get(tag))
        return tag in tags

    def tagged(self, tags) -> Units:
        """Units whose tag is marked in `tags` (a set or a tag -> bool mapping)."""
        return self.choose(lambda u: self._is_tagged(tags, u.tag))

    def not_tagged(self, tags) -> Units:
        return self.choose(lambda u: not self._is_tagged(tags, u.tag))

    def has_energy(self, energy: float) -> Units:
        return self.choose(lambda u: u.energy >= energy)

    def has_buff(self, buff_id: int) -> Units:
        return self.choose(lambda u: buff_id in u.buff_ids)

    def no_buff(self, buff_id: int) -> Units:
        return self.choose(lambda u: buff_id not in u.buff_ids)

    def is_started(self) -> Units:
        return self.choose(Unit.is_started)

    def is_built(self) -> Units:
        return self.choose(Unit.is_built)

    def is_idle(self) -> Units:
        return self.choose(Unit.is_idle)