"""Parse one side of an equation into (coefficient, metabolite) terms.

A side is zero or more terms joined by the literal " + ". Each term is an
optional coefficient token followed by whitespace, then the metabolite name:

    "2 B"        -> (2.0, "B")
    "(0.5) nadh" -> (0.5, "nadh")
    "1e-3 h2o"   -> (0.001, "h2o")
    "A"          -> (1.0, "A")

Coefficients and names share no delimiter other than whitespace, and names
can start with digits ("2-oxoglutarate", "3pg"). The rule used here:

    A leading run of the characters  0-9 . ( ) e -  is a coefficient token
    only if it is followed by whitespace AND is a valid float once the
    parentheses are removed. Otherwise the term has no coefficient (1.0)
    and the whole trimmed term is the metabolite name.

So "2-oxoglutarate" and "e- acceptor" keep their full names, while
"2 2-oxoglutarate" reads as two units of "2-oxoglutarate".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from .errors import MalformedTermError
from .utils import TERM_SEPARATOR

logger = logging.getLogger(__name__)

COEFFICIENT_CHARS = frozenset("0123456789.()e-")


@dataclass(frozen=True)
class Term:
    """One parsed term: coefficient as written and metabolite name.

    stoich is the coefficient as written (1.0 when absent); the side sign is
    applied later. met is trimmed and may be empty for a dangling coefficient.
    """

    stoich: float
    met: str


def split_terms(side: str, separator: str = TERM_SEPARATOR) -> list[str]:
    """Split a side on the literal separator, dropping blank terms."""
    return [t for t in side.split(separator) if t.strip()]


def _scan_coefficient(term: str) -> tuple[float | None, int]:
    """Return (value, end) of a leading coefficient token, or (None, 0)."""
    n = len(term)
    i = 0
    while i < n and term[i].isspace():
        i += 1
    start = i
    while i < n and term[i] in COEFFICIENT_CHARS:
        i += 1

    # needs a non-empty run and at least one whitespace char after it
    if i == start or i == n or not term[i].isspace():
        return None, 0

    text = term[start:i].replace("(", "").replace(")", "")
    try:
        value = float(text)
    except ValueError:
        return None, 0
    return value, i


def tokenize_term(term: str) -> Term:
    """Read one term. The metabolite may come back empty ("2 " has no name)."""
    value, end = _scan_coefficient(term)
    if value is None:
        return Term(stoich=1.0, met=term.strip())
    return Term(stoich=value, met=term[end:].strip())


def parse_met_list(
    terms: Sequence[str],
    *,
    strict: bool = False,
    labels: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Parse raw terms into a table of coefficients and metabolite names.

    Args:
        terms: raw term strings (already split on the separator)
        strict: if True, a term with a coefficient but no name raises
            MalformedTermError. If False the row is kept with met == ""
            and a warning is logged; callers filter those rows.
        labels: optional per-term labels (e.g. reaction abbreviations)
            quoted in diagnostics

    Returns:
        DataFrame with columns stoich (float) and met (str), one row per term.
    """
    if labels is not None and len(labels) != len(terms):
        raise ValueError("labels must have the same length as terms")

    parsed = [tokenize_term(t) for t in terms]

    dangling = [i for i, p in enumerate(parsed) if not p.met]
    if dangling:
        where = ", ".join(
            repr(terms[i]) if labels is None else f"{labels[i]}: {terms[i]!r}" for i in dangling
        )
        if strict:
            raise MalformedTermError(f"term(s) with a coefficient but no metabolite: {where}")
        logger.warning("%d term(s) with no metabolite: %s", len(dangling), where)

    return pd.DataFrame(
        {
            "stoich": np.array([p.stoich for p in parsed], dtype=float),
            "met": pd.Series([p.met for p in parsed], dtype=object),
        }
    )
