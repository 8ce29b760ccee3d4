"""
measura.errors
==============

Exception hierarchy shared by the unit engine and the registry.

Every error derives from :class:`UnitError` and additionally from the builtin
exception that describes the failure (``ValueError`` for bad input,
``TypeError`` for incompatible operands), so callers may catch either.
"""
from __future__ import annotations


class UnitError(Exception):
    """Base class for all measura errors."""


class InvalidSymbolError(UnitError, ValueError):
    """A unit symbol or name is empty or contains reserved characters."""


class DuplicateSymbolError(UnitError, ValueError):
    """A symbol (or alias) is already owned by another unit."""


class DuplicateNameError(UnitError, ValueError):
    """A unit name is already registered."""


class UnitNotFoundError(UnitError, ValueError):
    """A symbol, name or alias does not resolve to a registered unit."""


class UnitParseError(UnitError, ValueError):
    """A unit expression does not follow the canonical grammar."""

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class IncompatibleUnitsError(UnitError, TypeError):
    """Two units cannot be converted or added to one another."""


class NonLinearCompositeError(UnitError, ValueError):
    """A composite unit contains a sub-unit with an additive shift."""


__all__ = [
    "UnitError",
    "InvalidSymbolError",
    "DuplicateSymbolError",
    "DuplicateNameError",
    "UnitNotFoundError",
    "UnitParseError",
    "IncompatibleUnitsError",
    "NonLinearCompositeError",
]
