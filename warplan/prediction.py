"""
Monte Carlo outcome estimation for a single attack vector.

A prediction runs the same attack many times and summarizes how it went:
how often every territory fell, how many units were left when it did, and
how much of the chain was still standing when it didn't.

Conditional means are None when nothing was observed to condition on (no
wins, or no losses) rather than a 0/0 float.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from warplan.combat import Tracer, simulate_attack
from warplan.vectors import AttackVector


@dataclass(frozen=True)
class Prediction:
    """Aggregate statistics over many simulated attacks."""

    win_count: int
    loss_count: int

    remaining_units_if_win: float | None
    """Mean units left on the front over winning trials."""

    remaining_enemies_if_loss: float | None
    """Mean defenders left over losing trials: the units on the territory
    where the attack stalled plus every untouched territory after it."""

    remaining_territories_if_loss: float | None
    """Mean number of territories still held by the enemy over losing
    trials, the stalled one included."""

    @property
    def trials(self) -> int:
        return self.win_count + self.loss_count

    @property
    def win_likelihood(self) -> float:
        return self.win_count / self.trials


def predict(
    vector: AttackVector,
    bonus: int,
    trials: int,
    rng: Random | None = None,
    tracer: Tracer | None = None,
) -> Prediction:
    """Simulate ``trials`` independent attacks along ``vector`` with
    ``bonus`` extra units and aggregate the results."""
    if trials < 1:
        raise ValueError(f"simulation trial count must be at least 1, got {trials}")

    win_count = loss_count = 0
    total_units_on_front = 0
    total_enemies_remaining = 0
    total_territories_remaining = 0

    for _ in range(trials):
        result = simulate_attack(vector, bonus, rng, tracer)
        if result.won:
            win_count += 1
            total_units_on_front += result.units_on_front
        else:
            stalled = result.conquered_territory_count
            loss_count += 1
            total_enemies_remaining += result.enemy_units_on_front + vector.units_beyond(stalled)
            total_territories_remaining += len(vector) - stalled

    return Prediction(
        win_count=win_count,
        loss_count=loss_count,
        remaining_units_if_win=total_units_on_front / win_count if win_count else None,
        remaining_enemies_if_loss=total_enemies_remaining / loss_count if loss_count else None,
        remaining_territories_if_loss=total_territories_remaining / loss_count if loss_count else None,
    )
