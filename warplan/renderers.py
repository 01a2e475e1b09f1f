"""Renderers that convert predictions, plans and trace records into text.

Each render_* method returns a list of lines; callers decide whether to
print them, log them or hand them to the Streamlit UI.
"""

from __future__ import annotations

from warplan.planner import Plan, Setup
from warplan.prediction import Prediction
from warplan.records import AttackRecord, RoundRecord, TerritoryRecord


def _dice(dice: list[int]) -> str:
    return ", ".join(str(d) for d in dice)


class TextRenderer:
    """Renders results and traces to terminal text lines."""

    def render_prediction(self, definition: str, prediction: Prediction) -> list[str]:
        lines = [
            f"Attack vector '{definition}' prediction",
            f"\tWin count: {prediction.win_count} Loss count: {prediction.loss_count}",
        ]
        if prediction.remaining_units_if_win is not None:
            lines.append(
                f"\tWin likelihood: {prediction.win_likelihood:.2f} "
                f"with {prediction.remaining_units_if_win:.2f} units remaining"
            )
        else:
            lines.append("\tWin likelihood: 0 this is a debo move")
        if prediction.remaining_territories_if_loss is not None and prediction.remaining_enemies_if_loss is not None:
            lines.append(
                f"\t\tIf loss, {prediction.remaining_territories_if_loss:.2f} remaining "
                f"territories with {prediction.remaining_enemies_if_loss:.2f} enemies total"
            )
        return lines

    def render_setup(self, setup: Setup) -> list[str]:
        definition = setup.vector.definition
        lines = [f"{setup.bonus} bonus armies to attack vector '{definition}'"]
        lines.extend(self.render_prediction(definition, setup.prediction))
        return lines

    def render_plan(self, plan: Plan) -> list[str]:
        lines = ["Highest scoring setup is below"]
        for setup in plan.setups:
            lines.extend(self.render_setup(setup))
        return lines

    def render_attack(self, record: AttackRecord) -> list[str]:
        title = f"Beginning simulation of attack vector '{record.vector}'"
        lines = [title, "-" * len(title)]
        for territory in record.territories:
            lines.extend(self.render_territory(territory))
        return lines

    def render_territory(self, record: TerritoryRecord) -> list[str]:
        title = f"Attacking {record.front_units} vs {record.territory_units}"
        lines = [title, "-" * len(title)]
        lines.extend(self.render_round(r) for r in record.rounds)
        lines.append("")
        if not record.conquered:
            lines.append(
                f"Attack failed with {record.remaining_front_units} vs "
                f"{record.remaining_territory_units} remaining"
            )
            lines.append("")
        return lines

    def render_round(self, record: RoundRecord) -> str:
        return (
            f"{record.front_units} [{_dice(record.attack_dice)}] vs "
            f"{record.territory_units} [{_dice(record.defend_dice)}] = "
            f"{record.front_losses} front units lost and "
            f"{record.territory_losses} defending units lost"
        )
