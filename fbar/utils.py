"""Shared constants and table checks.

This module provides common pieces used across the package:
- Default arrow pattern and term separator for equation strings
- Column sets each table must carry
- Column presence checks raising SchemaError
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

import pandas as pd

from .errors import SchemaError


# =============================================================================
# Equation grammar
# =============================================================================
# One or more '-' / '=' with a mandatory '>' head and an optional '<' tail.
DEFAULT_ARROW = r"<?[-=]+>"

# Literal separator between terms on one side of an equation.
TERM_SEPARATOR = " + "

# Compartment tag at the very start of an equation, e.g. "[c]: A -> B".
COMPARTMENT_PREFIX = re.compile(r"\[\w+?\]:")


# =============================================================================
# Table schemas
# =============================================================================
REQUIRED_COLUMNS: tuple[str, ...] = ("abbreviation", "equation", "uppbnd", "lowbnd", "obj_coef")

# What the assembler needs from the reaction table once `equation` is gone.
LP_COLUMNS: tuple[str, ...] = ("abbreviation", "uppbnd", "lowbnd", "obj_coef")

STOICH_COLUMNS: tuple[str, ...] = ("abbreviation", "stoich", "met")


# =============================================================================
# Column checks
# =============================================================================
def missing_columns(frame: pd.DataFrame, columns: Iterable[str]) -> list[str]:
    """Return the names in `columns` that `frame` lacks, in the given order."""
    return [c for c in columns if c not in frame.columns]


def require_columns(frame: object, columns: Sequence[str], *, table: str) -> None:
    """Raise SchemaError unless `frame` is a DataFrame carrying all `columns`.

    Args:
        frame: table to check
        columns: required column names
        table: name used in the error message

    Raises:
        SchemaError: listing every missing column at once
    """
    if not isinstance(frame, pd.DataFrame):
        raise SchemaError(f"{table} must be a pandas DataFrame, got {type(frame).__name__}")
    missing = missing_columns(frame, columns)
    if missing:
        raise SchemaError(f"{table} is missing required column(s): {', '.join(missing)}")


def compile_arrow(regex_arrow: str | re.Pattern[str]) -> re.Pattern[str]:
    """Accept a pattern string or an already compiled pattern."""
    if isinstance(regex_arrow, re.Pattern):
        return regex_arrow
    return re.compile(regex_arrow)
