"""Tests for Monte Carlo outcome estimation."""

from random import Random
from unittest.mock import patch

import pytest

from warplan.combat import AttackResult
from warplan.prediction import Prediction, predict
from warplan.vectors import AttackVector


def result(conquered: int, front: int, enemy: int, territories: int = 3) -> AttackResult:
    return AttackResult(
        conquered_territory_count=conquered,
        units_on_front=front,
        enemy_units_on_front=enemy,
        territory_count=territories,
    )


class TestPredict:
    def test_counts_add_up(self) -> None:
        vector = AttackVector.parse("7:3,3,1")
        p = predict(vector, 0, 1000, Random(1))
        assert p.win_count + p.loss_count == 1000
        assert p.trials == 1000
        assert 0.0 <= p.win_likelihood <= 1.0

    def test_aggregates(self) -> None:
        """Two wins with 3 and 5 units left; a loss stalled at the first
        territory with 1 defender left (1 + 3 + 4 enemies, 3 territories)
        and one stalled at the last with 2 left (2 enemies, 1 territory)."""
        vector = AttackVector.build(5, [2, 3, 4])
        outcomes = [result(3, 3, 0), result(0, 1, 1), result(3, 5, 0), result(2, 1, 2)]
        with patch("warplan.prediction.simulate_attack", side_effect=outcomes):
            p = predict(vector, 0, 4)
        assert p == Prediction(
            win_count=2,
            loss_count=2,
            remaining_units_if_win=4.0,
            remaining_enemies_if_loss=5.0,
            remaining_territories_if_loss=2.0,
        )
        assert p.win_likelihood == 0.5

    def test_no_losses_leaves_loss_means_undefined(self) -> None:
        vector = AttackVector.build(5, [2, 3, 4])
        with patch("warplan.prediction.simulate_attack", return_value=result(3, 2, 0)):
            p = predict(vector, 0, 10)
        assert p.win_likelihood == 1.0
        assert p.remaining_units_if_win == 2.0
        assert p.remaining_enemies_if_loss is None
        assert p.remaining_territories_if_loss is None

    def test_no_wins_leaves_win_mean_undefined(self) -> None:
        """A single unit never attacks, so every territory stays put."""
        vector = AttackVector.build(1, [2, 3, 4])
        p = predict(vector, 0, 50, Random(2))
        assert p.win_count == 0
        assert p.win_likelihood == 0.0
        assert p.remaining_units_if_win is None
        assert p.remaining_enemies_if_loss == 9.0
        assert p.remaining_territories_if_loss == 3.0

    def test_empty_territories_always_win(self) -> None:
        p = predict(AttackVector.build(1, [0]), 0, 10, Random(3))
        assert p.win_count == 10
        assert p.remaining_units_if_win == 0.0
        assert p.remaining_enemies_if_loss is None

    def test_passes_bonus_through(self) -> None:
        vector = AttackVector.build(1, [1])
        with patch("warplan.prediction.simulate_attack", return_value=result(1, 1, 0, 1)) as mock:
            predict(vector, 4, 2)
        assert all(c.args[1] == 4 for c in mock.call_args_list)

    @pytest.mark.parametrize("trials", [0, -5])
    def test_needs_a_trial(self, trials: int) -> None:
        with pytest.raises(ValueError):
            predict(AttackVector.build(3, [1]), 0, trials)

    def test_seeded_predictions_repeat(self) -> None:
        vector = AttackVector.parse("7:3,3,1")
        assert predict(vector, 2, 300, Random(5)) == predict(vector, 2, 300, Random(5))

    def test_bonus_helps(self) -> None:
        vector = AttackVector.parse("5:3,3")
        weak = predict(vector, 0, 2000, Random(6))
        strong = predict(vector, 20, 2000, Random(6))
        assert strong.win_likelihood > weak.win_likelihood
