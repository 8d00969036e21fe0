"""Exceptions raised while turning a reaction table into an LP.

All of them derive from ValueError: every failure here is bad input, and
nothing is retried or partially returned.
"""

from __future__ import annotations


class FbarError(ValueError):
    """Base class for reaction-table parsing errors."""


class SchemaError(FbarError):
    """A table is missing required columns, or has duplicate or dangling keys."""


class MalformedEquationError(FbarError):
    """An equation has zero or several arrows, or uses unsupported syntax."""


class MalformedTermError(FbarError):
    """A term has a coefficient but no metabolite identifier."""
