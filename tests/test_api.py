"""End-to-end pipeline: table -> LP, deprecated aliases, and a solver round trip.

Network (toy uptake/conversion/secretion chain):
  EX_A:  -> A        (uptake, at most 10)
  R1:    A -> 2 B
  EX_B:  B ->        (objective)
Optimal secretion of B is 20.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from scipy.optimize import linprog

from fbar import (
    MalformedEquationError,
    collapse_reactions_lp,
    expand_reactions,
    expanded_to_lp,
    parse_reaction_table,
    reactiontbl_to_expanded,
    reactiontbl_to_lp,
)


def _toy_table():
    return pd.DataFrame(
        {
            "abbreviation": ["EX_A", "R1", "EX_B"],
            "equation": [" -> A", "A -> 2 B", "B -> "],
            "uppbnd": [10.0, 1000.0, 1000.0],
            "lowbnd": [0.0, 0.0, 0.0],
            "obj_coef": [0.0, 0.0, 1.0],
        }
    )


def test_pipeline_matches_two_steps():
    table = _toy_table()
    lp = reactiontbl_to_lp(table)
    ref = expanded_to_lp(reactiontbl_to_expanded(table))
    assert lp.metabolites == ref.metabolites == ("A", "B")
    assert lp.reactions == ("EX_A", "R1", "EX_B")
    assert np.allclose(lp.A.toarray(), ref.A.toarray())
    assert np.allclose(lp.A.toarray(), [
        [1.0, -1.0,  0.0],
        [0.0,  2.0, -1.0],
    ])


def test_lp_is_solvable_by_an_external_solver():
    lp = reactiontbl_to_lp(_toy_table())
    sign = -1.0 if lp.modelsense == "max" else 1.0
    res = linprog(
        sign * lp.obj,
        A_eq=lp.A,
        b_eq=lp.rhs,
        bounds=list(zip(lp.lb, lp.ub)),
        method="highs",
    )
    assert res.success
    assert -res.fun == pytest.approx(20.0)
    assert np.allclose(res.x, [10.0, 10.0, 20.0])


def test_pipeline_propagates_errors():
    table = _toy_table()
    table.loc[1, "equation"] = "A -> B -> C"
    with pytest.raises(MalformedEquationError):
        reactiontbl_to_lp(table)


def test_expand_reactions_deprecated():
    with pytest.warns(DeprecationWarning, match="reactiontbl_to_expanded"):
        stoich = expand_reactions(_toy_table())
    assert stoich["met"].tolist() == ["A", "A", "B", "B"]
    assert np.allclose(stoich["stoich"], [1.0, -1.0, 2.0, -1.0])


def test_collapse_reactions_lp_deprecated():
    table = _toy_table()
    stoich = reactiontbl_to_expanded(table).stoich
    with pytest.warns(DeprecationWarning, match="expanded_to_lp"):
        lp = collapse_reactions_lp(stoich, table)
    assert lp.reactions == ("EX_A", "R1", "EX_B")
    assert np.allclose(lp.obj, [0, 0, 1])


def test_parse_reaction_table_deprecated():
    with pytest.warns(DeprecationWarning, match="reactiontbl_to_lp"):
        lp = parse_reaction_table(_toy_table())
    assert lp.A.shape == (2, 3)
