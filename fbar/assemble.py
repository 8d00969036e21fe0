"""Assemble the long-format model into a sparse FBA linear program.

    maximize    obj^T v
    subject to  A v = 0        (steady-state mass balance, one row per metabolite)
                lb <= v <= ub

A has one row per distinct metabolite, sorted by name, and one column per
reaction in rxns order. Duplicate (metabolite, reaction) entries are summed:
"A + A -> B" and "2 A -> B" give the same column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy import sparse

from .errors import SchemaError
from .expand import ExpandedModel
from .utils import LP_COLUMNS, STOICH_COLUMNS, require_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LPProblem:
    """Solver-neutral FBA problem.

    Shapes:
      A:          (nM, nR) sparse, CSC
      obj, lb, ub: (nR,)
      sense, rhs:  (nM,)

    metabolites/reactions name the rows/columns of A.
    """

    A: sparse.csc_matrix
    obj: NDArray[np.float64]
    sense: NDArray[np.str_]
    rhs: NDArray[np.float64]
    lb: NDArray[np.float64]
    ub: NDArray[np.float64]
    metabolites: tuple[str, ...]
    reactions: tuple[str, ...]
    modelsense: str = "max"

    def __post_init__(self):
        A = sparse.csc_matrix(self.A, dtype=float)
        object.__setattr__(self, "A", A)
        for name in ("obj", "rhs", "lb", "ub"):
            object.__setattr__(self, name, np.asarray(getattr(self, name), dtype=float))
        object.__setattr__(self, "sense", np.asarray(self.sense, dtype=str))
        object.__setattr__(self, "metabolites", tuple(self.metabolites))
        object.__setattr__(self, "reactions", tuple(self.reactions))

        nM, nR = A.shape
        if len(self.metabolites) != nM:
            raise ValueError(f"A has {nM} rows but {len(self.metabolites)} metabolite names")
        if len(self.reactions) != nR:
            raise ValueError(f"A has {nR} columns but {len(self.reactions)} reaction names")
        for name in ("obj", "lb", "ub"):
            if getattr(self, name).shape != (nR,):
                raise ValueError(f"{name} must have shape ({nR},)")
        for name in ("sense", "rhs"):
            if getattr(self, name).shape != (nM,):
                raise ValueError(f"{name} must have shape ({nM},)")
        if self.modelsense not in ("max", "min"):
            raise ValueError(f"modelsense must be 'max' or 'min', got {self.modelsense!r}")

    @property
    def n_metabolites(self) -> int:
        return int(self.A.shape[0])

    @property
    def n_reactions(self) -> int:
        return int(self.A.shape[1])

    def stoichiometric_frame(self) -> pd.DataFrame:
        """Dense copy of A labelled by metabolite (rows) and reaction (columns)."""
        return pd.DataFrame(
            self.A.toarray(),
            index=pd.Index(self.metabolites, name="met"),
            columns=pd.Index(self.reactions, name="abbreviation"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with the usual LP field names, for solver adapters."""
        return {
            "A": self.A,
            "obj": self.obj,
            "sense": self.sense,
            "rhs": self.rhs,
            "lb": self.lb,
            "ub": self.ub,
            "modelsense": self.modelsense,
        }


def expanded_to_lp(expanded: ExpandedModel) -> LPProblem:
    """Build the LP from an ExpandedModel (possibly edited by the caller).

    Raises:
        SchemaError: missing columns in rxns/stoich, duplicate abbreviations
            in rxns, stoich rows naming a reaction absent from rxns, or
            missing, empty or non-string met values
    """
    rxns = expanded.rxns
    stoich = expanded.stoich
    require_columns(rxns, LP_COLUMNS, table="rxns")
    require_columns(stoich, STOICH_COLUMNS, table="stoich")

    reactions = rxns["abbreviation"].tolist()
    rxn_index = {a: j for j, a in enumerate(reactions)}
    if len(rxn_index) != len(reactions):
        dup = rxns["abbreviation"][rxns["abbreviation"].duplicated()].unique().tolist()
        raise SchemaError(f"duplicate abbreviation(s) in rxns: {', '.join(map(str, dup))}")

    unknown = [a for a in pd.unique(stoich["abbreviation"]) if a not in rxn_index]
    if unknown:
        raise SchemaError(
            "stoich references reaction(s) absent from rxns: " + ", ".join(map(str, unknown))
        )

    bad_met = stoich["met"].map(lambda m: not isinstance(m, str) or m == "").astype(bool)
    if bad_met.any():
        offenders = pd.unique(stoich.loc[bad_met.to_numpy(), "abbreviation"]).tolist()
        raise SchemaError(
            "stoich has missing, empty or non-string met values in reaction(s): "
            + ", ".join(map(str, offenders))
        )

    metabolites = sorted(set(stoich["met"]))
    met_index = {m: i for i, m in enumerate(metabolites)}

    rows = stoich["met"].map(met_index).to_numpy(dtype=np.int64)
    cols = stoich["abbreviation"].map(rxn_index).to_numpy(dtype=np.int64)
    vals = stoich["stoich"].to_numpy(dtype=float)

    # COO -> CSC sums duplicate coordinates
    A = sparse.coo_matrix((vals, (rows, cols)), shape=(len(metabolites), len(reactions))).tocsc()
    A.eliminate_zeros()

    nM = len(metabolites)
    logger.debug("assembled A with shape %s and %d nonzeros", A.shape, A.nnz)

    return LPProblem(
        A=A,
        obj=rxns["obj_coef"].to_numpy(dtype=float),
        sense=np.full(nM, "="),
        rhs=np.zeros(nM),
        lb=rxns["lowbnd"].to_numpy(dtype=float),
        ub=rxns["uppbnd"].to_numpy(dtype=float),
        metabolites=metabolites,
        reactions=[str(a) for a in reactions],
        modelsense="max",
    )
