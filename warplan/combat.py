"""
Combat engine: resolves dice exchanges, single territories and whole vectors.

The engine is a set of pure functions of their inputs and a dice source.
Passing an explicit ``random.Random`` makes a simulation reproducible;
passing a Tracer records every exchange and fires the Tracer's hooks, which
is how verbose debugging output is produced without any global state.

Rules:

- The attacker rolls one die per attacking unit, up to three. One unit must
  always stay behind, so a front of N units rolls min(N - 1, 3) dice.
- The defender rolls one die per unit, up to two.
- Dice are paired highest against highest. For each pair the higher die
  wins; ties go to the defender. The loser of each pair loses one unit.
- A territory falls when its last defender is gone. The front then moves
  in, leaving one unit behind to hold the conquered territory.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from random import Random
from typing import Any

from warplan.dice import MAX_ATTACK_DICE, MAX_DEFEND_DICE, roll_dice
from warplan.records import AttackRecord, RoundRecord, TerritoryRecord
from warplan.types import EventName
from warplan.vectors import AttackVector, Territory

GARRISON_UNITS = 1


@dataclass(frozen=True)
class AttackResult:
    """Outcome of one simulated traversal of an attack vector."""

    conquered_territory_count: int
    """How many territories fell, 0..territory_count."""

    units_on_front: int
    """Units left on the front. After a territory falls the garrison unit
    is already subtracted, and an empty territory taken by a
    one-unit front leaves it at zero."""

    enemy_units_on_front: int
    """Defenders left on the territory where the attack stalled, or 0 when
    every territory fell."""

    territory_count: int

    @property
    def won(self) -> bool:
        return self.conquered_territory_count == self.territory_count


class Tracer:
    """Observer for traced simulations.

    Builds an AttackRecord per simulated attack and fires the handlers
    registered in ``events`` at each hook point. Any handler that returns a
    truthy value is removed after it runs, so one-shot handlers can
    unregister themselves.

    Args:
        keep_records: Keep finished AttackRecords in ``records``. Turn this
            off when handlers consume records as they finish, otherwise a
            long Monte Carlo run keeps every dice roll in memory.
    """

    def __init__(self, *, keep_records: bool = True) -> None:
        self.keep_records = keep_records
        self.records: list[AttackRecord] = []
        self.events: defaultdict[EventName, list[Callable[..., Any]]] = defaultdict(list)
        self.current: AttackRecord | None = None
        self._territory: TerritoryRecord | None = None

    def triggers(self, event: EventName, *args: Any) -> None:
        """Fire all handlers registered for the named event."""
        to_remove = [f for f in self.events[event] if f(*args)]
        for f in to_remove:
            self.events[event].remove(f)

    def start_attack(self, vector: AttackVector, bonus: int) -> None:
        self.current = AttackRecord(vector=vector.definition, bonus=bonus)
        self.triggers("attack_started", self.current)

    def start_territory(self, index: int, front_units: int, territory_units: int) -> None:
        self._territory = TerritoryRecord(
            index=index, front_units=front_units, territory_units=territory_units,
        )
        if self.current is not None:
            self.current.territories.append(self._territory)

    def round_resolved(self, record: RoundRecord) -> None:
        if self._territory is not None:
            self._territory.rounds.append(record)
        self.triggers("round_resolved", record)

    def end_territory(self, front_units: int, territory_units: int, conquered: bool) -> None:
        territory = self._territory
        if territory is None:
            return
        territory.remaining_front_units = front_units
        territory.remaining_territory_units = territory_units
        territory.conquered = conquered
        if conquered:
            self.triggers("territory_conquered", territory)
        else:
            self.triggers("vector_exhausted", territory)

    def end_attack(self, result: AttackResult) -> None:
        record = self.current
        if record is None:
            return
        record.conquered_territory_count = result.conquered_territory_count
        record.units_on_front = result.units_on_front
        record.enemy_units_on_front = result.enemy_units_on_front
        if self.keep_records:
            self.records.append(record)
        self.triggers("attack_finished", record)
        self.current = None
        self._territory = None


def dice_counts(front_units: int, territory_units: int) -> tuple[int, int]:
    """Return (attacker dice, defender dice) for an exchange."""
    attack_dice = min(front_units - GARRISON_UNITS, MAX_ATTACK_DICE)
    defend_dice = min(territory_units, MAX_DEFEND_DICE)
    return attack_dice, defend_dice


def single_round(
    front_units: int,
    territory_units: int,
    rng: Random | None = None,
    tracer: Tracer | None = None,
) -> tuple[int, int]:
    """Resolve one exchange of dice.

    All dice pairs are resolved at once, so a round costs the two sides
    min(attacker dice, defender dice) units between them.

    Returns (remaining front units, remaining territory units).
    """
    if front_units <= GARRISON_UNITS or territory_units <= 0:
        raise ValueError(
            f"no attack possible with {front_units} front units vs {territory_units} defenders"
        )

    attack_count, defend_count = dice_counts(front_units, territory_units)
    attack_dice = roll_dice(attack_count, rng)
    defend_dice = roll_dice(defend_count, rng)

    front_losses = territory_losses = 0
    for attack, defend in zip(attack_dice, defend_dice):
        if attack > defend:
            territory_losses += 1
        else:
            front_losses += 1

    if tracer is not None:
        tracer.round_resolved(RoundRecord(
            front_units=front_units,
            territory_units=territory_units,
            attack_dice=attack_dice,
            defend_dice=defend_dice,
            front_losses=front_losses,
            territory_losses=territory_losses,
        ))

    return front_units - front_losses, territory_units - territory_losses


def conquer_territory(
    front_units: int,
    territory: Territory,
    rng: Random | None = None,
    tracer: Tracer | None = None,
) -> tuple[int, int]:
    """Attack one territory until it falls or the front is down to its
    garrison unit.

    Returns (remaining front units, remaining territory units). The
    territory fell when the second value is 0.
    """
    territory_units = territory.units
    while front_units > GARRISON_UNITS and territory_units > 0:
        front_units, territory_units = single_round(front_units, territory_units, rng, tracer)
    return front_units, territory_units


def simulate_attack(
    vector: AttackVector,
    bonus: int = 0,
    rng: Random | None = None,
    tracer: Tracer | None = None,
) -> AttackResult:
    """Attack every territory of ``vector`` in order, starting with its
    front units plus ``bonus``.

    The attack stops at the first territory that holds. A front with no
    unit to spare (one unit or fewer) can't attack at all: it stalls at the
    next defended territory without rolling, leaving its defenders
    untouched. An empty territory falls without a roll whatever the front
    size; the front never drops below zero when it moves on.
    """
    if bonus < 0:
        raise ValueError(f"bonus units must not be negative, got {bonus}")

    if tracer is not None:
        tracer.start_attack(vector, bonus)

    front_units = vector.front_units + bonus
    enemy_units = 0
    conquered = 0

    for index, territory in enumerate(vector.territories):
        if tracer is not None:
            tracer.start_territory(index, front_units, territory.units)

        front_units, enemy_units = conquer_territory(front_units, territory, rng, tracer)
        if tracer is not None:
            tracer.end_territory(front_units, enemy_units, enemy_units == 0)
        if enemy_units > 0:
            break

        conquered += 1
        front_units = max(front_units - GARRISON_UNITS, 0)

    result = AttackResult(
        conquered_territory_count=conquered,
        units_on_front=front_units,
        enemy_units_on_front=enemy_units,
        territory_count=len(vector),
    )
    if tracer is not None:
        tracer.end_attack(result)
    return result
