"""Resource and supply state of the controlled player."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cost:
    """The full cost of an ability: minerals, vespene and food."""

    minerals: int = 0
    vespene: int = 0
    food: int = 0

    def mul(self, count: int) -> Cost:
        """Return the cost of `count` repetitions."""
        return Cost(self.minerals * count, self.vespene * count, self.food * count)

    __mul__ = mul


@dataclass
class Player:
    """Common player stats from the latest observation plus what is known of the opponent."""

    player_id: int = 0
    minerals: int = 0
    vespene: int = 0
    food_cap: int = 0
    food_used: int = 0
    food_army: int = 0
    food_workers: int = 0
    idle_worker_count: int = 0
    army_count: int = 0
    warp_gate_count: int = 0
    larva_count: int = 0
    race_requested: int = 0
    race_actual: int = 0
    player_name: str = ""
    opponent_id: int = 0
    opponent_race: int = 0

    def food_left(self) -> int:
        """Amount under (positive) or over (negative) the current food cap."""
        return self.food_cap - self.food_used

    def can_afford(self, cost: Cost) -> bool:
        """True if the player currently has the resources and supply for `cost`."""
        return (
            self.minerals >= cost.minerals
            and self.vespene >= cost.vespene
            and (cost.food == 0 or self.food_cap >= self.food_used + cost.food)
        )

    def spend(self, cost: Cost) -> None:
        """Tentatively mark the resources of `cost` as unavailable."""
        self.minerals -= cost.minerals
        self.vespene -= cost.vespene
        self.food_used += cost.food