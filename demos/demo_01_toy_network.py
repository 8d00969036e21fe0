#!/usr/bin/env python3
"""
fbar Demo 1: Toy Glycolysis-like Network
========================================

Network:
  EX_glc:  -> glc                          (uptake, <= 10)
  HEX:     glc + atp -> g6p + adp
  PGI:     g6p <=> f6p
  LOWER:   f6p + 2 adp -> 2 pyr + 2 atp     (lumped lower glycolysis)
  EX_pyr:  pyr ->                           (objective)

Builds the long format and the sparse LP, prints both, then hands the LP to
scipy's HiGHS wrapper as an example external solver.
"""

import argparse
import logging

import numpy as np
import pandas as pd
from scipy.optimize import linprog

from fbar import expanded_to_lp, reactiontbl_to_expanded


def toy_table():
    return pd.DataFrame(
        {
            "abbreviation": ["EX_glc", "HEX", "PGI", "LOWER", "EX_pyr", "EX_adp", "EX_atp"],
            "equation": [
                " -> glc",
                "glc + atp -> g6p + adp",
                "g6p <=> f6p",
                "f6p + 2 adp -> 2 pyr + 2 atp",
                "pyr -> ",
                "adp <=> ",
                "atp <=> ",
            ],
            "uppbnd": [10, 1000, 1000, 1000, 1000, 1000, 1000],
            "lowbnd": [0, 0, -1000, 0, 0, -1000, -1000],
            "obj_coef": [0, 0, 0, 0, 1, 0, 0],
        }
    )


def solve(lp):
    """Maximize obj^T v s.t. A v = 0, lb <= v <= ub."""
    sign = -1.0 if lp.modelsense == "max" else 1.0
    res = linprog(
        sign * lp.obj,
        A_eq=lp.A,
        b_eq=lp.rhs,
        bounds=list(zip(lp.lb, lp.ub)),
        method="highs",
    )
    if not res.success:
        raise RuntimeError(f"LP failed: {res.message}")
    return sign * res.fun, res.x


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    expanded = reactiontbl_to_expanded(toy_table())
    print("stoich (long format):")
    print(expanded.stoich.to_string(index=False))
    print("\nreversible:", expanded.reversible[expanded.reversible].index.tolist())

    lp = expanded_to_lp(expanded)
    print(f"\nA: {lp.n_metabolites} metabolites x {lp.n_reactions} reactions, nnz={lp.A.nnz}")
    print(lp.stoichiometric_frame().to_string())

    objective, flux = solve(lp)
    print(f"\noptimal objective ({lp.modelsense}): {objective:.3f}")
    with np.printoptions(precision=3, suppress=True):
        for name, v in zip(lp.reactions, flux):
            print(f"  {name:8s} {v: .3f}")


if __name__ == '__main__':
    main()
