"""
Command line front end: ``warplan TRIALS BONUS THRESHOLD VECTOR [VECTOR ...]``.

With 0 bonus units the vectors are simply simulated and their predictions
printed. With bonus units, every split of the bonus across the vectors is
scored and the best looking one printed.

Setting the DEBUG_WARPLAN environment variable prints every dice roll of
every simulated attack.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from warplan.combat import Tracer
from warplan.config import WarConfig
from warplan.planner import plan_war, simulate_war
from warplan.renderers import TextRenderer
from warplan.vectors import parse_attack_vectors

DEBUG_ENV_NAME = "DEBUG_WARPLAN"

EXAMPLES = """\
Attack vectors are formatted as: [units on front]:[enemy territory 1 units],[enemy territory n units]

Examples:

\tJust simulate a single attack vector, no planning:
\t\twarplan 1000 0 0 7:3,3,1

\tSimulate multiple attack vectors, no planning:
\t\twarplan 1000 0 0 7:1,1,2 4:5,1

\tGiven 10 bonus armies, plan an attack across multiple vectors requiring a win likelihood of 0.8:
\t\twarplan 1000 10 0.8 3:2,2 4:1,1,1,1 2:2,1,2
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="warplan",
        description="Estimate outcomes of attack vectors and plan bonus army placement.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("trials", type=int, help="simulation iterations per prediction")
    parser.add_argument("bonus", type=int, help="bonus units to allocate (0 to just simulate)")
    parser.add_argument("threshold", type=float, help="minimum win likelihood for a vector to score")
    parser.add_argument("vectors", nargs="+", metavar="vector", help="attack vector, e.g. 10:3,2,99")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    parser.add_argument("--workers", type=int, default=1, help="processes used for predictions")
    parser.add_argument(
        "--strategy", choices=("product", "direct"), default="product",
        help="how bonus allocations are enumerated",
    )
    return parser


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV_NAME) is not None


def run(config: WarConfig, definitions: Sequence[str], renderer: TextRenderer | None = None) -> list[str]:
    """Run one simulate or plan pass and return the report lines."""
    renderer = renderer or TextRenderer()
    config.validate()
    vectors = parse_attack_vectors(definitions, limits=config.limits)

    tracer = None
    if config.trace:
        tracer = Tracer(keep_records=False)
        tracer.events["attack_finished"].append(
            lambda record: print("\n".join(renderer.render_attack(record)))
        )

    lines: list[str] = []
    if config.mode == "simulate":
        lines.append("Simulating simple war and printing predictions")
        for vector, prediction in simulate_war(vectors, config, tracer):
            lines.append("")
            lines.extend(renderer.render_prediction(vector.definition, prediction))
    else:
        lines.append("Attempting to plan war for specified vectors")
        lines.append("")
        lines.extend(renderer.render_plan(plan_war(vectors, config, tracer=tracer)))
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = WarConfig(
        trials=args.trials,
        bonus=args.bonus,
        threshold=args.threshold,
        seed=args.seed,
        workers=args.workers,
        strategy=args.strategy,
        trace=debug_enabled(),
    )
    try:
        lines = run(config, args.vectors)
    except ValueError as e:
        print(f"Aborting: {e}")
        return 1
    except MemoryError:
        print("Aborting: ran out of memory while planning")
        return 1
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
