"""Expand a wide reaction table into the long (stoichiometry) format.

Input: one row per reaction with columns
    abbreviation, equation, uppbnd, lowbnd, obj_coef  (+ any extra columns)

Output (ExpandedModel):
    stoich  one row per metabolite occurrence: abbreviation, stoich, met
    rxns    the input table without `equation`
    mets    distinct metabolite names

The long format is the place to edit a model before matrix assembly: build
a modified copy with dataclasses.replace(expanded, stoich=...) and pass it
to expanded_to_lp().
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .equation import split_on_arrow
from .errors import MalformedEquationError, SchemaError
from .terms import parse_met_list, split_terms
from .utils import COMPARTMENT_PREFIX, DEFAULT_ARROW, REQUIRED_COLUMNS, STOICH_COLUMNS, require_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpandedModel:
    """Long-format model, the editable stage between table and LP.

    Tables:
      stoich:     (nS, 3) columns abbreviation, stoich, met; one row per
                  metabolite occurrence, substrates negative
      rxns:       (nR, ...) the reaction table without `equation`
      mets:       (nM, 1) column met, distinct names
      reversible: (nR,) bool indexed by abbreviation, or None
    """

    stoich: pd.DataFrame
    rxns: pd.DataFrame
    mets: pd.DataFrame
    # informational only; bounds are the caller's business
    reversible: pd.Series | None = None

    @property
    def n_reactions(self) -> int:
        return int(len(self.rxns))

    @property
    def n_metabolites(self) -> int:
        return int(len(self.mets))


def validate_reaction_table(reaction_table: pd.DataFrame) -> None:
    """Check the reaction table before any parsing.

    Raises:
        SchemaError: not a DataFrame, missing columns, duplicate abbreviations
        MalformedEquationError: an equation is missing or not a string, or
            starts with a compartment tag
    """
    require_columns(reaction_table, REQUIRED_COLUMNS, table="reaction table")

    abbreviations = reaction_table["abbreviation"]
    dup = abbreviations[abbreviations.duplicated()].unique().tolist()
    if dup:
        raise SchemaError(f"duplicate abbreviation(s) in reaction table: {', '.join(map(str, dup))}")

    equations = reaction_table["equation"]
    not_text = equations.map(lambda eq: not isinstance(eq, str)).astype(bool)
    if not_text.any():
        offenders = abbreviations[not_text.to_numpy()].tolist()
        raise MalformedEquationError(
            "missing or non-string equation(s) for: " + ", ".join(map(str, offenders))
        )

    prefixed = equations.map(lambda eq: COMPARTMENT_PREFIX.match(eq) is not None).astype(bool)
    if prefixed.any():
        offenders = abbreviations[prefixed.to_numpy()].tolist()
        raise MalformedEquationError(
            "equations starting with a compartment tag such as '[c]:' are not supported: "
            + ", ".join(map(str, offenders))
        )


def reactiontbl_to_expanded(
    reaction_table: pd.DataFrame,
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
    *,
    strict: bool = False,
) -> ExpandedModel:
    """Parse a reaction table into the long format.

    Args:
        reaction_table: one row per reaction (see module docstring)
        regex_arrow: pattern matching exactly one arrow per equation
        strict: raise MalformedTermError on terms with a coefficient but no
            metabolite, instead of dropping them with a warning

    Returns:
        ExpandedModel. stoich rows are grouped by reaction in table order,
        substrates (negative) before products (positive).
    """
    validate_reaction_table(reaction_table)

    abbreviations = reaction_table["abbreviation"].tolist()
    split = split_on_arrow(reaction_table["equation"].tolist(), regex_arrow)

    owners: list = []
    directions: list[float] = []
    terms: list[str] = []
    for abbreviation, before, after in zip(abbreviations, split["before"], split["after"]):
        for side, direction in ((before, -1.0), (after, 1.0)):
            for term in split_terms(side):
                owners.append(abbreviation)
                directions.append(direction)
                terms.append(term)

    parsed = parse_met_list(terms, strict=strict, labels=[str(a) for a in owners])

    stoich = pd.DataFrame(
        {
            "abbreviation": pd.Series(owners, dtype=object),
            "stoich": parsed["stoich"].to_numpy() * np.asarray(directions, dtype=float),
            "met": parsed["met"].to_numpy(dtype=object),
        },
        columns=list(STOICH_COLUMNS),
    )
    stoich = stoich[stoich["met"] != ""].reset_index(drop=True)

    rxns = reaction_table.drop(columns="equation").reset_index(drop=True)
    mets = pd.DataFrame({"met": pd.Series(pd.unique(stoich["met"]), dtype=object)})
    reversible = pd.Series(
        split["reversible"].to_numpy(dtype=bool),
        index=pd.Index(abbreviations, name="abbreviation"),
        name="reversible",
    )

    logger.debug(
        "expanded %d reactions into %d stoich rows over %d metabolites",
        len(rxns), len(stoich), len(mets),
    )
    return ExpandedModel(stoich=stoich, rxns=rxns, mets=mets, reversible=reversible)
