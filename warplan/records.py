"""Structured trace records for simulated attacks.

These dataclasses capture every dice exchange of a traced attack so it can
be rendered as text (TextRenderer) or inspected in tests. They are only
built when a Tracer is attached; untraced Monte Carlo runs never allocate
them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RoundRecord:
    """One exchange of dice between the front and a territory."""

    front_units: int
    """Units on the front before the exchange."""

    territory_units: int
    """Defending units before the exchange."""

    attack_dice: list[int]
    """Attacker dice, highest first."""

    defend_dice: list[int]
    """Defender dice, highest first."""

    front_losses: int = 0
    territory_losses: int = 0


@dataclass
class TerritoryRecord:
    """The full assault on one territory of a vector."""

    index: int
    """Position of the territory in its vector."""

    front_units: int
    territory_units: int
    rounds: list[RoundRecord] = field(default_factory=list)
    remaining_front_units: int = 0
    remaining_territory_units: int = 0
    conquered: bool = False


@dataclass
class AttackRecord:
    """One simulated traversal of an attack vector."""

    vector: str
    """Definition string of the vector being attacked."""

    bonus: int
    territories: list[TerritoryRecord] = field(default_factory=list)
    conquered_territory_count: int = 0
    units_on_front: int = 0
    enemy_units_on_front: int = 0
