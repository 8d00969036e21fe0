"""Public pipeline: reaction table -> long format -> LP.

This module defines:
- reactiontbl_to_lp() entrypoint (expand then assemble)
- deprecated aliases kept for callers of the older names:
    expand_reactions()       -> reactiontbl_to_expanded(...).stoich
    collapse_reactions_lp()  -> expanded_to_lp(...)
    parse_reaction_table()   -> reactiontbl_to_lp(...)
"""

from __future__ import annotations

import re
import warnings

import pandas as pd

from .assemble import LPProblem, expanded_to_lp
from .expand import ExpandedModel, reactiontbl_to_expanded
from .utils import DEFAULT_ARROW, STOICH_COLUMNS, require_columns


def reactiontbl_to_lp(
    reaction_table: pd.DataFrame,
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
    *,
    strict: bool = False,
) -> LPProblem:
    """Run the whole pipeline:

    1) validate the table
    2) split equations and parse terms into the long format
    3) assemble the sparse LP

    Returns:
      LPProblem
    """
    return expanded_to_lp(reactiontbl_to_expanded(reaction_table, regex_arrow, strict=strict))


def _deprecated(old: str, new: str) -> None:
    warnings.warn(f"{old}() is deprecated, use {new}() instead", DeprecationWarning, stacklevel=3)


def expand_reactions(
    reaction_table: pd.DataFrame,
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
) -> pd.DataFrame:
    _deprecated("expand_reactions", "reactiontbl_to_expanded")
    return reactiontbl_to_expanded(reaction_table, regex_arrow).stoich


def collapse_reactions_lp(stoich: pd.DataFrame, reaction_table: pd.DataFrame) -> LPProblem:
    """Assemble from a bare stoich table and a reaction table (equation column optional)."""
    _deprecated("collapse_reactions_lp", "expanded_to_lp")
    require_columns(stoich, STOICH_COLUMNS, table="stoich")
    require_columns(reaction_table, ("abbreviation",), table="reaction table")
    expanded = ExpandedModel(
        stoich=stoich,
        rxns=reaction_table.drop(columns="equation", errors="ignore").reset_index(drop=True),
        mets=pd.DataFrame({"met": pd.Series(pd.unique(stoich["met"]), dtype=object)}),
    )
    return expanded_to_lp(expanded)


def parse_reaction_table(
    reaction_table: pd.DataFrame,
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
) -> LPProblem:
    _deprecated("parse_reaction_table", "reactiontbl_to_lp")
    return reactiontbl_to_lp(reaction_table, regex_arrow)
