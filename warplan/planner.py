"""
Bonus allocation planning across several attack vectors.

Planning happens in two stages:

1. Build the setup table: one Prediction and score for every vector at
   every bonus level from 0 to the pool size. This is the expensive part,
   V * (B + 1) predictions of ``trials`` simulated attacks each.
2. Enumerate every way to split the bonus pool across the vectors, score
   each split by summing its setups' scores, and keep the best.

A setup scores its win likelihood if that meets the threshold, else 0, so a
plan's score rewards vectors that are likely to succeed and ignores long
shots entirely.

Scaling: the default "product" strategy visits (B + 1) ** V raw
allocations, the "direct" strategy only the C(B + V - 1, V - 1) that sum to
the pool. Both are exponential in the number of vectors, which is why
Limits.max_combinations is checked before any work starts.
"""

from __future__ import annotations

import concurrent.futures
import heapq
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from math import comb
from random import Random
from typing import Protocol

from warplan.combat import Tracer
from warplan.config import Limits, WarConfig
from warplan.prediction import Prediction, predict
from warplan.rng import derive_seed
from warplan.types import Strategy
from warplan.vectors import AttackVector, VectorError


class PlanSizeError(ValueError):
    """The allocation search is larger than the configured limit."""


class PlanCancelled(RuntimeError):
    """Enumeration was stopped through the cancellation event."""


class CancelEvent(Protocol):
    def is_set(self) -> bool: ...


# -----------------------------------------------------------
# Allocation enumeration
# -----------------------------------------------------------


def bonus_combinations(vector_count: int, bonus: int) -> Iterator[tuple[int, ...]]:
    """Yield every tuple of ``vector_count`` counters, each in 0..bonus.

    Counts like an odometer with ``bonus + 1`` digits per wheel: the first
    counter moves fastest and carries into the next when it wraps. Ends
    when the last counter wraps, after (bonus + 1) ** vector_count tuples.
    Tuples are NOT filtered by their sum.
    """
    if vector_count < 1:
        raise ValueError(f"need at least one vector to allocate to, got {vector_count}")
    counters = [0] * vector_count
    while True:
        yield tuple(counters)
        index = 0
        while index < vector_count:
            counters[index] += 1
            if counters[index] <= bonus:
                break
            counters[index] = 0
            index += 1
        else:
            return


def bonus_compositions(vector_count: int, bonus: int) -> Iterator[tuple[int, ...]]:
    """Yield only the allocations of ``bonus`` over ``vector_count``
    vectors that use the whole pool, in the same order bonus_combinations
    would produce them."""
    if vector_count < 1:
        raise ValueError(f"need at least one vector to allocate to, got {vector_count}")
    if vector_count == 1:
        yield (bonus,)
        return
    # The last counter is the slowest wheel, so it leads the recursion.
    for last in range(bonus + 1):
        for rest in bonus_compositions(vector_count - 1, bonus - last):
            yield rest + (last,)


def allocation_count(vector_count: int, bonus: int, strategy: Strategy = "product") -> int:
    """How many allocations ``strategy`` visits."""
    if strategy == "product":
        return (bonus + 1) ** vector_count
    return comb(bonus + vector_count - 1, vector_count - 1)


def allocations(
    vector_count: int,
    bonus: int,
    strategy: Strategy = "product",
    cancel: CancelEvent | None = None,
) -> Iterator[tuple[int, ...]]:
    """Yield every allocation of the whole bonus pool."""
    source = bonus_combinations if strategy == "product" else bonus_compositions
    for allocation in source(vector_count, bonus):
        if cancel is not None and cancel.is_set():
            raise PlanCancelled("bonus allocation enumeration was cancelled")
        if sum(allocation) != bonus:
            continue
        yield allocation


def check_plan_size(vector_count: int, bonus: int, strategy: Strategy, limits: Limits) -> None:
    size = allocation_count(vector_count, bonus, strategy)
    if size > limits.max_combinations:
        raise PlanSizeError(
            f"planning {bonus} bonus units across {vector_count} vectors means "
            f"enumerating {size} allocations, the limit is {limits.max_combinations}"
        )


# -----------------------------------------------------------
# Setups
# -----------------------------------------------------------


@dataclass(frozen=True)
class Setup:
    """One vector predicted with one bonus level."""

    vector_index: int
    vector: AttackVector
    bonus: int
    prediction: Prediction
    score: float


def score_prediction(prediction: Prediction, threshold: float) -> float:
    """A prediction's win likelihood if it meets ``threshold``, else 0."""
    likelihood = prediction.win_likelihood
    return likelihood if likelihood >= threshold else 0.0


class SetupTable:
    """Setups indexed by (vector index, bonus level).

    Built once before enumeration and read-only afterwards.
    """

    def __init__(self, vectors: Sequence[AttackVector], bonus: int, rows: list[list[Setup]]) -> None:
        self.vectors = list(vectors)
        self.bonus = bonus
        self._rows = rows

    def __getitem__(self, key: tuple[int, int]) -> Setup:
        vector_index, bonus = key
        return self._rows[vector_index][bonus]

    def __len__(self) -> int:
        return len(self._rows)

    def row(self, vector_index: int) -> list[Setup]:
        return list(self._rows[vector_index])


def _predict_task(vector: AttackVector, bonus: int, trials: int, seed: int) -> Prediction:
    return predict(vector, bonus, trials, Random(seed))


def build_setups(
    vectors: Sequence[AttackVector],
    bonus: int,
    trials: int,
    threshold: float,
    *,
    seed: int | None = None,
    workers: int = 1,
    tracer: Tracer | None = None,
) -> SetupTable:
    """Predict every vector at every bonus level from 0 to ``bonus``.

    Each prediction draws from its own generator, seeded from ``seed``,
    the vector's position and the bonus level, so the table is the same
    whatever the worker count. With ``workers > 1`` predictions run in a
    process pool.
    """
    if not vectors:
        raise VectorError("at least one attack vector is required")
    if tracer is not None and workers > 1:
        raise ValueError("tracing is only supported with a single worker")

    base_seed = seed if seed is not None else random.getrandbits(64)
    tasks = [
        (index, level, derive_seed(base_seed, vector_index=index, bonus=level))
        for index in range(len(vectors))
        for level in range(bonus + 1)
    ]

    predictions: dict[tuple[int, int], Prediction] = {}
    if workers > 1:
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(_predict_task, vectors[index], level, trials, task_seed): (index, level)
                for index, level, task_seed in tasks
            }
            for future in concurrent.futures.as_completed(futures):
                predictions[futures[future]] = future.result()
    else:
        for index, level, task_seed in tasks:
            predictions[index, level] = predict(vectors[index], level, trials, Random(task_seed), tracer)

    rows = [
        [
            Setup(
                vector_index=index,
                vector=vector,
                bonus=level,
                prediction=predictions[index, level],
                score=score_prediction(predictions[index, level], threshold),
            )
            for level in range(bonus + 1)
        ]
        for index, vector in enumerate(vectors)
    ]
    return SetupTable(vectors, bonus, rows)


# -----------------------------------------------------------
# Plans
# -----------------------------------------------------------


@dataclass(frozen=True)
class Plan:
    """A full split of the bonus pool, one setup per vector."""

    setups: tuple[Setup, ...]
    total_score: float

    @property
    def bonuses(self) -> tuple[int, ...]:
        return tuple(s.bonus for s in self.setups)


def make_plan(table: SetupTable, allocation: Sequence[int]) -> Plan:
    setups = tuple(table[index, level] for index, level in enumerate(allocation))
    return Plan(setups=setups, total_score=sum(s.score for s in setups))


def iter_plans(
    table: SetupTable,
    strategy: Strategy = "product",
    cancel: CancelEvent | None = None,
) -> Iterator[Plan]:
    """Yield a Plan for every allocation of the table's whole bonus pool."""
    for allocation in allocations(len(table), table.bonus, strategy, cancel):
        yield make_plan(table, allocation)


def best_plan(
    table: SetupTable,
    strategy: Strategy = "product",
    cancel: CancelEvent | None = None,
) -> Plan:
    """Return the highest scoring plan.

    Folds a running maximum instead of collecting plans, so memory stays
    flat however many allocations there are. On a tie the plan enumerated
    first wins.
    """
    best: Plan | None = None
    for plan in iter_plans(table, strategy, cancel):
        if best is None or plan.total_score > best.total_score:
            best = plan
    if best is None:
        raise RuntimeError(f"no allocation of {table.bonus} bonus units across {len(table)} vectors")
    return best


def rank_plans(
    table: SetupTable,
    top: int,
    strategy: Strategy = "product",
    cancel: CancelEvent | None = None,
) -> list[Plan]:
    """Return the ``top`` highest scoring plans, best first. Ties keep
    enumeration order."""
    return heapq.nlargest(top, iter_plans(table, strategy, cancel), key=lambda p: p.total_score)


# -----------------------------------------------------------
# Entry points
# -----------------------------------------------------------


def _check_vectors(vectors: Sequence[AttackVector], limits: Limits) -> None:
    if not vectors:
        raise VectorError("at least one attack vector is required")
    if len(vectors) > limits.max_vectors:
        raise VectorError(f"{len(vectors)} attack vectors given, the limit is {limits.max_vectors}")


def simulate_war(
    vectors: Sequence[AttackVector],
    config: WarConfig,
    tracer: Tracer | None = None,
) -> list[tuple[AttackVector, Prediction]]:
    """Predict each vector as given, with ``config.bonus`` extra units on
    every front (zero in simulate-only runs)."""
    config.validate()
    _check_vectors(vectors, config.limits)
    base_seed = config.seed if config.seed is not None else random.getrandbits(64)
    return [
        (
            vector,
            predict(
                vector,
                config.bonus,
                config.trials,
                Random(derive_seed(base_seed, vector_index=index, bonus=config.bonus)),
                tracer,
            ),
        )
        for index, vector in enumerate(vectors)
    ]


def plan_war(
    vectors: Sequence[AttackVector],
    config: WarConfig,
    *,
    tracer: Tracer | None = None,
    cancel: CancelEvent | None = None,
) -> Plan:
    """Find the best split of ``config.bonus`` units across ``vectors``."""
    config.validate()
    _check_vectors(vectors, config.limits)
    check_plan_size(len(vectors), config.bonus, config.strategy, config.limits)
    table = build_setups(
        vectors,
        config.bonus,
        config.trials,
        config.threshold,
        seed=config.seed,
        workers=config.workers,
        tracer=tracer,
    )
    return best_plan(table, config.strategy, cancel)
