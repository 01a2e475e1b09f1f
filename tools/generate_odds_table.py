#!/usr/bin/env python3
"""Generate a win-likelihood table for single territory battles.

Runs Monte Carlo simulations of a front of 2..MAX_FRONT units attacking one
territory of 1..MAX_DEFENDERS units and writes the table as a Python
module defining a single ``odds`` dict keyed by (front, defenders).

Usage:
    python tools/generate_odds_table.py [output_file]

If no output file is given, writes to /tmp/odds.py.
"""

import sys
from pprint import pprint
from random import Random

from warplan.prediction import predict
from warplan.vectors import AttackVector

TRIALS = 10000
MAX_FRONT = 20
MAX_DEFENDERS = 15


def main() -> None:
    [fname] = sys.argv[1:2] or ["/tmp/odds.py"]
    rng = Random(0)
    odds = {}
    for front in range(2, MAX_FRONT + 1):
        for defenders in range(1, MAX_DEFENDERS + 1):
            vector = AttackVector.build(front, [defenders])
            odds[front, defenders] = round(predict(vector, 0, TRIALS, rng).win_likelihood, 4)

    with open(fname, "w") as f:
        f.write("odds = ")
        pprint(odds, stream=f)


if __name__ == "__main__":
    main()
