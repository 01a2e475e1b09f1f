#!/usr/bin/env python3
"""Plan 10 bonus armies across three vectors with a 0.8 win threshold."""

from warplan.config import WarConfig
from warplan.planner import plan_war
from warplan.renderers import TextRenderer
from warplan.vectors import parse_attack_vectors

vectors = parse_attack_vectors(["3:2,2", "4:1,1,1,1", "2:2,1,2"])
plan = plan_war(vectors, WarConfig(trials=1000, bonus=10, threshold=0.8, seed=1))
print("\n".join(TextRenderer().render_plan(plan)))
print(f"total score {plan.total_score:.2f} with bonuses {plan.bonuses}")
