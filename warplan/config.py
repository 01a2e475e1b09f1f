"""
Run configuration for WarPlan.

Limits replaces the fixed table sizes a board-game helper like this would
otherwise bake in: the number of attack vectors, territories per vector and
the size of the allocation search are all bounded, and going over a bound is
a clear rejection instead of a silent overflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from warplan.types import Mode, Strategy

MAX_VECTORS = 16
MAX_TERRITORIES = 128
MAX_COMBINATIONS = 10**8


@dataclass(frozen=True)
class Limits:
    """Upper bounds enforced when building vectors and plans."""

    max_vectors: int = MAX_VECTORS
    """How many attack vectors a single run may plan across."""

    max_territories: int = MAX_TERRITORIES
    """How many territories a single attack vector may chain through."""

    max_combinations: int = MAX_COMBINATIONS
    """Largest number of bonus allocations the planner will enumerate.
    Enumeration cost is exponential in the vector count, so this fails
    fast instead of hanging."""


@dataclass(frozen=True)
class WarConfig:
    """Everything a run needs besides the attack vectors themselves.

    Attributes:
        trials: Simulated attacks per (vector, bonus) prediction.
        bonus: Size of the bonus pool. Zero means simulate only.
        threshold: Minimum win likelihood for a setup to score. Not range
            checked: anything above 1.0 zeroes every score.
        seed: Base seed. When set, every prediction gets its own stream
            derived from it, so runs are reproducible.
        workers: Processes used to build the prediction table.
        strategy: How bonus allocations are enumerated.
        trace: Record and render every dice roll (very verbose).
        limits: Size bounds for vectors and the allocation search.
    """

    trials: int
    bonus: int = 0
    threshold: float = 0.0
    seed: int | None = None
    workers: int = 1
    strategy: Strategy = "product"
    trace: bool = False
    limits: Limits = field(default_factory=Limits)

    @property
    def mode(self) -> Mode:
        return "simulate" if self.bonus == 0 else "plan"

    def validate(self) -> None:
        """Reject parameters no run could use."""
        if self.trials < 1:
            raise ValueError(f"simulation trial count must be at least 1, got {self.trials}")
        if self.bonus < 0:
            raise ValueError(f"bonus units must not be negative, got {self.bonus}")
        if self.workers < 1:
            raise ValueError(f"worker count must be at least 1, got {self.workers}")
        if self.strategy not in ("product", "direct"):
            raise ValueError(f"unknown enumeration strategy: {self.strategy!r}")
        if self.trace and self.workers > 1:
            raise ValueError("tracing is only supported with a single worker")
