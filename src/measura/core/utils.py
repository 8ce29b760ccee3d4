"""
measura.core.utils
==================

Canonical ordering and string rendering for unit compositions.

A composition is any iterable of ``(DefinedUnit, exponent)`` pairs. Three
renderings are provided:

- ``render_symbol``: the canonical wire format, e.g. ``kg*m/s^2`` or ``1/s``.
  It is exactly what :mod:`measura.units.parser` accepts.
- ``render_name``: the long form, e.g. ``kilogram * meter / second^2``.
- ``render_pretty``: display only, e.g. ``kg·m/s²``.

Ordering is total and deterministic: positive exponents first, then negative;
within each group by ascending absolute exponent, ties broken alphabetically by
the rendered label (symbol or name).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Literal, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from measura.core.unit import DefinedUnit

Term = Tuple["DefinedUnit", int]
LabelKey = Literal["symbol", "name"]

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def sort_terms(terms: Iterable[Term], key: LabelKey = "symbol") -> List[Term]:
    """Return ``terms`` in canonical rendering order (zero exponents dropped)."""
    terms = list(terms)
    positive = sorted(
        (t for t in terms if t[1] > 0),
        key=lambda t: (t[1], getattr(t[0], key)),
    )
    negative = sorted(
        (t for t in terms if t[1] < 0),
        key=lambda t: (-t[1], getattr(t[0], key)),
    )
    return positive + negative


def _render(terms: Iterable[Term], key: LabelKey, mul: str, div: str, reciprocal: str) -> str:
    out = ""
    for unit, exp in sort_terms(terms, key):
        if not out:
            prefix = "" if exp > 0 else reciprocal
        else:
            prefix = mul if exp > 0 else div
        power = f"^{abs(exp)}" if abs(exp) > 1 else ""
        out += f"{prefix}{getattr(unit, key)}{power}"
    return out


def render_symbol(terms: Iterable[Term]) -> str:
    return _render(terms, "symbol", "*", "/", "1/")


def render_name(terms: Iterable[Term]) -> str:
    return _render(terms, "name", " * ", " / ", "1 / ")


def render_pretty(terms: Iterable[Term]) -> str:
    """Turn a composition into 'kg·m/s²' style."""
    num, den = [], []
    for unit, exp in sort_terms(terms):
        if exp > 0:
            num.append(unit.symbol + _sup(exp))
        else:
            den.append(unit.symbol + _sup(-exp))

    if not num and not den:
        return ""
    numerator = "·".join(num) if num else "1"
    denominator = "·".join(den)
    return f"{numerator}/{denominator}" if denominator else numerator


__all__ = ["sort_terms", "render_symbol", "render_name", "render_pretty"]
