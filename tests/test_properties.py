"""Property tests for the combat engine, estimator and enumerator."""

from __future__ import annotations

from math import comb
from random import Random

from hypothesis import given, settings
from hypothesis import strategies as st

from warplan.combat import conquer_territory, dice_counts, simulate_attack, single_round
from warplan.dice import roll_dice
from warplan.planner import allocations, bonus_combinations, bonus_compositions
from warplan.prediction import predict
from warplan.vectors import AttackVector, Territory

seeds = st.integers(min_value=0, max_value=2**32)


def vector_strategy(min_units: int = 1) -> st.SearchStrategy[AttackVector]:
    return st.builds(
        AttackVector.build,
        st.integers(min_value=1, max_value=30),
        st.lists(st.integers(min_value=min_units, max_value=10), min_size=1, max_size=6),
    )


@given(count=st.integers(min_value=1, max_value=3), seed=seeds)
def test_roll_dice_sorted_in_range(count: int, seed: int) -> None:
    dice = roll_dice(count, Random(seed))
    assert len(dice) == count
    assert all(1 <= d <= 6 for d in dice)
    assert all(a >= b for a, b in zip(dice, dice[1:]))


@given(front=st.integers(min_value=2, max_value=50), territory=st.integers(min_value=1, max_value=50), seed=seeds)
def test_single_round_loses_one_unit_per_pair(front: int, territory: int, seed: int) -> None:
    new_front, new_territory = single_round(front, territory, Random(seed))
    attack, defend = dice_counts(front, territory)
    assert (front - new_front) + (territory - new_territory) == min(attack, defend)
    assert new_front >= 1
    assert new_territory >= 0


@given(front=st.integers(min_value=1, max_value=60), territory=st.integers(min_value=0, max_value=60), seed=seeds)
def test_conquer_territory_terminates(front: int, territory: int, seed: int) -> None:
    new_front, new_territory = conquer_territory(front, Territory(territory), Random(seed))
    assert new_territory == 0 or new_front <= 1
    assert new_front <= front
    assert new_territory <= territory


@given(vector=vector_strategy(min_units=0), bonus=st.integers(min_value=0, max_value=20), seed=seeds)
def test_simulate_attack_win_iff_enemy_cleared(vector: AttackVector, bonus: int, seed: int) -> None:
    result = simulate_attack(vector, bonus, Random(seed))
    assert 0 <= result.conquered_territory_count <= len(vector)
    assert result.won == (result.enemy_units_on_front == 0)
    assert result.units_on_front >= 0


@given(vector=vector_strategy(min_units=0), trials=st.integers(min_value=1, max_value=40), seed=seeds)
@settings(max_examples=30)
def test_predict_counts_every_trial(vector: AttackVector, trials: int, seed: int) -> None:
    p = predict(vector, 0, trials, Random(seed))
    assert p.win_count + p.loss_count == trials
    assert (p.remaining_units_if_win is None) == (p.win_count == 0)
    assert (p.remaining_enemies_if_loss is None) == (p.loss_count == 0)


@given(vectors=st.integers(min_value=1, max_value=4), bonus=st.integers(min_value=0, max_value=6))
def test_enumeration_counts(vectors: int, bonus: int) -> None:
    assert sum(1 for _ in bonus_combinations(vectors, bonus)) == (bonus + 1) ** vectors
    filtered = list(allocations(vectors, bonus))
    assert len(filtered) == comb(bonus + vectors - 1, vectors - 1)
    assert filtered == list(bonus_compositions(vectors, bonus))
