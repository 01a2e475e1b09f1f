"""Tests for UI helper functions."""

from __future__ import annotations

from ui.app import parse_vector_text, prediction_row
from warplan.prediction import Prediction


class TestParseVectorText:
    def test_one_per_line(self) -> None:
        assert parse_vector_text("3:2,2\n4:1,1\n") == ["3:2,2", "4:1,1"]

    def test_skips_blank_lines(self) -> None:
        assert parse_vector_text("\n  3:2 \n\n") == ["3:2"]


class TestPredictionRow:
    def test_undefined_means_stay_blank(self) -> None:
        p = Prediction(
            win_count=0, loss_count=4,
            remaining_units_if_win=None,
            remaining_enemies_if_loss=2.5,
            remaining_territories_if_loss=1.0,
        )
        row = prediction_row("1:2", 3, p)
        assert row["vector"] == "1:2"
        assert row["bonus"] == 3
        assert row["win likelihood"] == 0.0
        assert row["units left if win"] is None
        assert row["enemies left if loss"] == 2.5
