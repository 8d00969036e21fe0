"""Split reaction equations into substrate side, product side and reversibility.

An equation reads  <side> <arrow> <side>,  e.g.  "A + 2 B <=> C".
The arrow is located with a regular expression that must match exactly once.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from .errors import MalformedEquationError
from .utils import DEFAULT_ARROW, compile_arrow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitEquation:
    """One equation cut at its arrow.

    before/after are trimmed; either may be empty (exchange reactions).
    reversible is True when the matched arrow contains '<'.
    """

    before: str
    after: str
    reversible: bool


def count_arrows(equation: str, regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW) -> int:
    """Number of non-overlapping arrow matches in `equation`."""
    pattern = compile_arrow(regex_arrow)
    return sum(1 for _ in pattern.finditer(equation))


def _cut(equation: str, pattern: re.Pattern[str]) -> SplitEquation:
    m = pattern.search(equation)
    return SplitEquation(
        before=equation[: m.start()].strip(),
        after=equation[m.end() :].strip(),
        reversible="<" in m.group(0),
    )


def split_equation(
    equation: str,
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
) -> SplitEquation:
    """Split a single equation.

    Raises:
        MalformedEquationError: if the arrow does not match exactly once
    """
    pattern = compile_arrow(regex_arrow)
    n = count_arrows(equation, pattern)
    if n != 1:
        raise MalformedEquationError(
            f"expected exactly one arrow matching {pattern.pattern!r}, found {n} in {equation!r}"
        )
    return _cut(equation, pattern)


def split_on_arrow(
    equations: Sequence[str],
    regex_arrow: str | re.Pattern[str] = DEFAULT_ARROW,
) -> pd.DataFrame:
    """Split a batch of equations.

    Parameters
    - equations: equation strings, one per reaction
    - regex_arrow: arrow pattern (string or compiled)

    Returns
    - DataFrame with columns before, after, reversible; one row per equation,
      in input order.

    Notes
    - Arrow counts are checked for the whole batch before anything is split.
      A single bad equation fails the batch, and the error lists all of them.
    """
    pattern = compile_arrow(regex_arrow)
    equations = [str(eq) for eq in equations]

    counts = [count_arrows(eq, pattern) for eq in equations]
    bad = [(eq, n) for eq, n in zip(equations, counts) if n != 1]
    if bad:
        detail = "; ".join(f"{eq!r} ({n} arrows)" for eq, n in bad)
        raise MalformedEquationError(
            f"{len(bad)} equation(s) do not contain exactly one arrow matching "
            f"{pattern.pattern!r}: {detail}"
        )

    parts = [_cut(eq, pattern) for eq in equations]
    logger.debug("split %d equations on %r", len(parts), pattern.pattern)

    return pd.DataFrame(
        {
            "before": pd.Series([p.before for p in parts], dtype=object),
            "after": pd.Series([p.after for p in parts], dtype=object),
            "reversible": pd.Series([p.reversible for p in parts], dtype=bool),
        }
    )
