"""
Dice rolling primitives for attack resolution.

Every die is a plain d6. Raw generator output is drawn 32 bits at a time and
anything at or above the largest multiple of six that fits is thrown away and
redrawn, so the modulo reduction never favours the low faces.

Rolls are always returned highest first: the combat engine pairs attacker
and defender dice by position, so the ordering is part of the contract.
"""

from __future__ import annotations

from random import Random, getrandbits

DICE_SIDES = 6
RAND_BITS = 32
MAX_DICE_RAND_VALUE = ((1 << RAND_BITS) // DICE_SIDES) * DICE_SIDES

MAX_ATTACK_DICE = 3
MAX_DEFEND_DICE = 2


def d6(rng: Random | None = None) -> int:
    """Roll a single unbiased d6.

    Uses ``rng`` when given, otherwise the process-wide generator.
    """
    draw = rng.getrandbits if rng is not None else getrandbits
    value = draw(RAND_BITS)
    while value >= MAX_DICE_RAND_VALUE:
        value = draw(RAND_BITS)
    return value % DICE_SIDES + 1


def roll_dice(count: int, rng: Random | None = None) -> list[int]:
    """Roll ``count`` d6 and return them sorted highest first."""
    return sorted((d6(rng) for _ in range(count)), reverse=True)
