"""Streamlit attack planner UI.

Run with: PYTHONPATH=. streamlit run ui/app.py
"""

from __future__ import annotations

import streamlit as st

from warplan.config import WarConfig
from warplan.planner import build_setups, check_plan_size, rank_plans, simulate_war
from warplan.prediction import Prediction
from warplan.vectors import VectorError, parse_attack_vectors

DEFAULT_VECTORS = "3:2,2\n4:1,1,1,1\n2:2,1,2"


def parse_vector_text(text: str) -> list[str]:
    """Split the text area into vector definitions, one per non-blank line."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def prediction_row(definition: str, bonus: int, prediction: Prediction) -> dict:
    """Flatten a prediction into a table row. Undefined means stay blank."""
    return {
        "vector": definition,
        "bonus": bonus,
        "win likelihood": round(prediction.win_likelihood, 3),
        "wins": prediction.win_count,
        "losses": prediction.loss_count,
        "units left if win": prediction.remaining_units_if_win,
        "territories left if loss": prediction.remaining_territories_if_loss,
        "enemies left if loss": prediction.remaining_enemies_if_loss,
    }


def run_config() -> WarConfig:
    """Render sidebar controls and return the run configuration."""
    st.sidebar.header("Simulation")
    trials = st.sidebar.number_input("Trials per prediction", min_value=1, value=1000, step=100)
    bonus = st.sidebar.number_input("Bonus units", min_value=0, value=10)
    threshold = st.sidebar.slider("Win likelihood threshold", 0.0, 1.0, 0.8, 0.05)
    seeded = st.sidebar.checkbox("Fixed seed")
    seed = st.sidebar.number_input("Seed", min_value=0, value=1, disabled=not seeded)
    strategy = st.sidebar.selectbox("Enumeration", ["product", "direct"])
    return WarConfig(
        trials=int(trials),
        bonus=int(bonus),
        threshold=float(threshold),
        seed=int(seed) if seeded else None,
        strategy=strategy,
    )


def main() -> None:
    st.set_page_config(page_title="WarPlan", layout="wide")
    st.title("WarPlan")

    config = run_config()
    text = st.text_area("Attack vectors (one per line)", DEFAULT_VECTORS, height=150)
    top = st.sidebar.slider("Plans to show", 1, 20, 5)
    go = st.sidebar.button("Simulate" if config.mode == "simulate" else "Plan", type="primary")

    if not go:
        return

    try:
        vectors = parse_attack_vectors(parse_vector_text(text), limits=config.limits)
        config.validate()
        if config.mode == "simulate":
            results = simulate_war(vectors, config)
            st.subheader("Predictions")
            st.dataframe([prediction_row(v.definition, config.bonus, p) for v, p in results])
            return

        check_plan_size(len(vectors), config.bonus, config.strategy, config.limits)
        with st.spinner("Predicting every vector at every bonus level..."):
            table = build_setups(
                vectors, config.bonus, config.trials, config.threshold, seed=config.seed,
            )
        plans = rank_plans(table, top, config.strategy)
    except (VectorError, ValueError) as e:
        st.error(str(e))
        return

    best = plans[0]
    st.subheader("Best plan")
    st.metric("Total score", f"{best.total_score:.2f}")
    st.dataframe([
        prediction_row(s.vector.definition, s.bonus, s.prediction) for s in best.setups
    ])

    st.subheader("Top plans")
    st.dataframe([
        {"score": round(p.total_score, 3), "bonuses": " / ".join(str(b) for b in p.bonuses)}
        for p in plans
    ])


if __name__ == "__main__":
    main()
